from enum import Enum


class RegionLabel(Enum):
    EUROPE = "Europe"
    NORTH_AMERICA = "North America"
    ASIA_PACIFIC = "Asia Pacific"
    AFRICA = "Africa"
    LATIN_AMERICA = "Latin America"


class DataQuality(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    PROJECTED = "projected"


class PolicyType(Enum):
    COMPREHENSIVE = "comprehensive"
    BILL = "bill"
    VOLUNTARY = "voluntary"
    NATIONAL_STRATEGY = "national_strategy"
    SANDBOX = "sandbox"
    SECTORAL = "sectoral"


class SortKey(Enum):
    BY_DATE = "by_date"
    BY_COUNTRY = "by_country"
    BY_NAME = "by_name"
