from enum import Enum

class Collection(Enum):
    MASTER = "master"


class MasterFields:
    TICKER = "ticker"
    NAME = "name"
    ETRADE_PATTERN_LOOKUP = "etradePatternLookup"
