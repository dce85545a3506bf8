from typing import Dict, Iterable, List, Set
from utils.core.enums import RegionLabel


# Region label -> countries, in display order
REGION_MAP: Dict[str, List[str]] = {
    RegionLabel.EUROPE.value: ["EU", "UK"],
    RegionLabel.NORTH_AMERICA.value: ["Canada"],
    RegionLabel.ASIA_PACIFIC.value: ["Singapore", "South Korea"],
    RegionLabel.AFRICA.value: ["Rwanda", "Tunisia"],
    RegionLabel.LATIN_AMERICA.value: ["Brazil"],
}


def available_regions() -> List[str]:
    return list(REGION_MAP.keys())


def resolve(selected_regions: Iterable[str]) -> Set[str]:
    """
    Resolves a selection of region labels to the set of countries they cover.

    Unknown labels contribute nothing. An empty selection resolves to an empty
    set; callers that treat "no regions selected" as "no restriction" must
    check the selection itself, not this result.

    Args:
        selected_regions: Region labels from the closed region table

    Returns:
        Union of the countries mapped to each selected region
    """
    allowed: Set[str] = set()
    for region in selected_regions:
        allowed.update(REGION_MAP.get(region, []))
    return allowed
