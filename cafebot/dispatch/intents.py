"""Intent, sub-conversation and entity names shared by the dispatcher.

Each sub-conversation is registered under the intent that starts it.
"""

BOOK_TABLE = "BookTable"
WHO_ARE_YOU = "WhoAreYou"
WHAT_CAN_YOU_DO = "WhatCanYouDo"
FIND_CAFE_LOCATIONS = "FindCafeLocations"
CANCEL = "Cancel"
QNA = "QnA"
CHIT_CHAT = "ChitChat"
HELP = "Help"
NONE_INTENT = "None"

# Card-only actions posted by the reservation card
BOOK_TABLE_SUBMIT = "Book_Table_Submit"
BOOK_TABLE_CANCEL = "Book_Table_Cancel"

# Entity names
USER_NAME_ENTITY = "userName_patternAny"
QUERY_ENTITY = "query"
CONFIRMATION_ENTITY = "confirmationList"
LOCATION_ENTITY = "cafeLocation"
DATE_TIME_ENTITY = "datetime"
PARTY_SIZE_ENTITY = "partySize"
