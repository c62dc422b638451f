# persona_core/constants.py

EMAILS = "emails"
SITE_INFO = "siteInfo"
MANAGE_PAGE = "managePage"
MAIN_SITE = "main_site"
LOGGED_IN = "loggedIn"
USERS_COMPUTER = "usersComputer"
EMAIL_TO_USER_ID = "emailToUserID"
RETURN_TO = "returnTo"
INTERACTION_DATA = "interaction_data"
STAGED_ON_BEHALF_OF = "stagedOnBehalfOf"

# Every recognised namespace and the value it is seeded with when absent.
NAMESPACE_DEFAULTS = {
    EMAIL_TO_USER_ID: {},
    EMAILS: {},
    INTERACTION_DATA: {},
    LOGGED_IN: {},
    MAIN_SITE: {},
    MANAGE_PAGE: {},
    RETURN_TO: None,
    SITE_INFO: {},
    STAGED_ON_BEHALF_OF: None,
    USERS_COMPUTER: {},
}

# Namespaces dropped by a full clear(); the rest survive it.
CLEARED_NAMESPACES = (EMAILS, SITE_INFO, MANAGE_PAGE)

KEY_MATERIAL_FIELDS = ("priv", "pub", "cert")

ONE_MINUTE_S = 60
ONE_DAY_S = 60 * 60 * 24
RETURN_TO_TTL_S = 5 * 60
POLL_INTERVAL_S = 2.0

STATE_SEEN = "seen"
STATE_CONFIRMED = "confirmed"
STATE_DENIED = "denied"
STATE_ASK = "ask"  # only reachable through a forced ask
VALID_STATES = (STATE_SEEN, STATE_CONFIRMED, STATE_DENIED)
