"""Internal constants shared across the library."""

BASE_URL = "https://runtimeconfig.googleapis.com/v1beta1"
USER_AGENT = "pyruntimeconfig"
CONFIG_NAME = "firebase"

#: Variable name holding the metadata document; watched with ``:watch``.
META_VARIABLE = "meta"

#: Version published before any configuration exists. Never fetched.
EMPTY_VERSION = "v0"

#: Lower bound for the first watch request.
EPOCH_TIMESTAMP = "1970-01-01T00:00:00.000Z"

#: The server answers a watch within 60s; a few extra seconds tells an
#: empty long-poll apart from a hung connection.
WATCH_TIMEOUT_S: float = 65.0
REQUEST_TIMEOUT_S: float = 30.0

#: Returned by the watch endpoint when nothing changed before its internal timeout.
BENIGN_WATCH_STATUS = 502

RETRY_DELAY_S: float = 1.0
RETRY_MAX_DELAY_S: float = 60.0

#: Where the configured credential is injected into the merged snapshot.
CREDENTIAL_PATH: tuple[str, ...] = ("firebase", "credential")
