"""
Region Geography

Static geographic reference data and the lookups built on it:

- ZIP prefix ranges -> state code (``state_from_zip``)
- state -> region -> ZIP prefixes (``find_region_by_zip``, ``regions_for_state``)
- state -> region -> adjacent / non-adjacent regions (used to boost budget allocation
  to areas near a partner's home region)
- plan type -> which regions a bundle includes (``region_allocation_by_plan``)

``RegionGeography`` is the default implementation of the geographic lookup the
allocator and plan services depend on. Callers with a richer source (a HUD crosswalk,
a database) can pass any object exposing the same methods.
"""

from types import MappingProxyType
from typing import List, Mapping, NamedTuple, Optional, Tuple

from claimrouter.models.enums import RegionPlanType
from claimrouter.models.schemas import RegionAllocationPlan


class RegionAdjacency(NamedTuple):
    adjacent: Tuple[str, ...]
    non_adjacent: Tuple[str, ...]


# =============================================================================
# ZIP -> State
# =============================================================================

# Inclusive 3-digit ZIP prefix ranges per state
ZIP_PREFIX_RANGES: Mapping[str, Tuple[Tuple[int, int], ...]] = MappingProxyType({
    "AL": ((350, 369),),
    "AK": ((995, 999),),
    "AZ": ((850, 865),),
    "AR": ((716, 729),),
    "CA": ((900, 961),),
    "CO": ((800, 816),),
    "CT": ((60, 69),),
    "DE": ((197, 199),),
    "DC": ((200, 205),),
    "FL": ((320, 349),),
    "GA": ((300, 319), (398, 399),),
    "HI": ((967, 968),),
    "ID": ((832, 838),),
    "IL": ((600, 629),),
    "IN": ((460, 479),),
    "IA": ((500, 528),),
    "KS": ((660, 679),),
    "KY": ((400, 427),),
    "LA": ((700, 714),),
    "ME": ((39, 49),),
    "MD": ((206, 219),),
    "MA": ((10, 27), (55, 55),),
    "MI": ((480, 499),),
    "MN": ((550, 567),),
    "MS": ((386, 397),),
    "MO": ((630, 658),),
    "MT": ((590, 599),),
    "NE": ((680, 693),),
    "NV": ((889, 898),),
    "NH": ((30, 38),),
    "NJ": ((70, 89),),
    "NM": ((870, 884),),
    "NY": ((100, 149),),
    "NC": ((270, 289),),
    "ND": ((580, 588),),
    "OH": ((430, 459),),
    "OK": ((730, 749),),
    "OR": ((970, 979),),
    "PA": ((150, 196),),
    "RI": ((28, 29),),
    "SC": ((290, 299),),
    "SD": ((570, 577),),
    "TN": ((370, 385),),
    "TX": ((750, 799), (885, 885),),
    "UT": ((840, 847),),
    "VT": ((50, 59),),
    "VA": ((220, 246),),
    "WA": ((980, 994),),
    "WV": ((247, 268),),
    "WI": ((530, 549),),
    "WY": ((820, 831),),
})


# =============================================================================
# State -> Region -> ZIP prefixes
# =============================================================================

STATE_REGION_ZIP_PREFIXES: Mapping[str, Mapping[str, Tuple[str, ...]]] = MappingProxyType({
    "TX": MappingProxyType({
        "North Texas": ("750", "751", "752", "753", "754", "760", "761", "762"),
        "Houston Metro": ("770", "771", "772", "773", "774", "775", "776", "777"),
        "Austin Area": ("786", "787", "788", "789"),
        "San Antonio Area": ("780", "781", "782", "783", "784", "785"),
        "Dallas-Fort Worth Metroplex": ("755", "756", "757", "758", "759", "763", "764", "765"),
        "East Texas": ("755", "756", "757", "758"),
        "West Texas": ("790", "791", "792", "793", "794", "795", "796", "797", "798", "799"),
        "South Texas": ("783", "784", "785", "788"),
    }),
    "FL": MappingProxyType({
        "South Florida": ("330", "331", "332", "333", "334"),
        "Central Florida": ("327", "328", "336", "337", "338", "346", "347"),
        "Jacksonville Area": ("320", "321", "322"),
        "Southwest Florida": ("339", "340", "341", "342"),
        "Panhandle": ("323", "324", "325", "326"),
    }),
    "CA": MappingProxyType({
        "Bay Area": ("940", "941", "942", "943", "944", "945", "946", "947", "948", "949", "950", "951"),
        "Los Angeles Metro": ("900", "901", "902", "903", "904", "905", "906", "907", "908", "910", "911", "912", "913", "914", "915", "916", "917", "918"),
        "San Diego Area": ("919", "920", "921", "922"),
        "Central Valley": ("930", "931", "932", "933", "934", "935", "936", "937", "938", "939", "952", "953", "954", "955", "956", "957", "958", "959"),
        "Inland Empire": ("923", "924", "925", "926", "927"),
        "Northern California": ("959", "960", "961"),
    }),
    "OK": MappingProxyType({
        "Oklahoma City Metro": ("730", "731", "734", "735"),
        "Tulsa Area": ("740", "741", "743", "744"),
        "Southwest Oklahoma": ("732", "733", "736", "737"),
        "Northeast Oklahoma": ("743", "744", "745", "746"),
    }),
    "MS": MappingProxyType({
        "Jackson Metro": ("390", "391", "392"),
        "Gulf Coast": ("394", "395"),
        "Northern Mississippi": ("386", "387", "388", "389"),
        "Delta Region": ("387", "388", "389", "390", "391"),
    }),
    "IL": MappingProxyType({
        "Chicago Metro": ("600", "601", "602", "603", "604", "605", "606"),
        "Northern Illinois": ("610", "611", "612"),
        "Central Illinois": ("616", "617", "618", "619", "626", "627"),
        "Southern Illinois": ("620", "622", "623", "624", "625", "628", "629"),
    }),
    "MO": MappingProxyType({
        "Kansas City Metro": ("640", "641", "644", "660", "661", "662", "664"),
        "St. Louis Metro": ("630", "631", "633", "634", "635", "636", "637", "638"),
        "Springfield Area": ("648", "649", "656", "657", "658"),
        "Central Missouri": ("650", "651", "652", "653", "654", "655"),
    }),
    "VA": MappingProxyType({
        "Northern Virginia": ("201", "220", "221", "222", "223"),
        "Richmond Area": ("230", "231", "232", "233", "234"),
        "Hampton Roads": ("233", "234", "235", "236", "237"),
        "Southwest Virginia": ("240", "241", "242", "243", "244", "245", "246"),
    }),
    "GA": MappingProxyType({
        "Atlanta Metro": ("300", "303", "310", "311", "312"),
        "North Georgia": ("301", "302", "305", "306"),
        "Savannah Area": ("313", "314", "315"),
        "Augusta Area": ("308", "309"),
        "Columbus Area": ("318", "319"),
    }),
    "NC": MappingProxyType({
        "Charlotte Metro": ("280", "281", "282"),
        "Raleigh-Durham-Chapel Hill": ("275", "276", "277"),
        "Greensboro Area": ("270", "271", "272", "273", "274"),
        "Coastal": ("283", "284", "285", "286", "287"),
        "Western NC": ("287", "288", "289"),
    }),
    "NY": MappingProxyType({
        "New York City": ("100", "101", "102", "103", "104", "110", "111", "112", "113", "114", "116"),
        "Long Island": ("115", "117", "118", "119"),
        "Hudson Valley": ("105", "106", "107", "108", "109", "125", "126", "127"),
        "Buffalo Area": ("140", "141", "142", "143"),
        "Rochester-Syracuse": ("120", "121", "122", "123", "130", "131", "132", "133", "144", "145", "146", "147"),
    }),
    "CO": MappingProxyType({
        "Denver Metro": ("800", "801", "802", "803", "804", "805"),
        "Front Range": ("806", "808", "809"),
        "Western Colorado": ("814", "815", "816"),
        "Southern Colorado": ("810", "811", "812", "813"),
    }),
    "WA": MappingProxyType({
        "Seattle Metro": ("980", "981", "982"),
        "Tacoma Area": ("983", "984", "985"),
        "Vancouver Area": ("986"),
        "Spokane Area": ("990", "991", "992", "993", "994"),
        "Central Washington": ("988", "989", "993"),
    }),
    "LA": MappingProxyType({
        "New Orleans Metro": ("700", "701"),
        "Baton Rouge Area": ("707", "708"),
        "Shreveport-Bossier": ("710", "711", "712"),
        "Acadiana": ("705", "706"),
    }),
})


# =============================================================================
# Region adjacency
# =============================================================================

REGION_ADJACENCY: Mapping[str, Mapping[str, RegionAdjacency]] = MappingProxyType({
    "TX": MappingProxyType({
        "North Texas": RegionAdjacency(
            adjacent=("Dallas-Fort Worth Metroplex", "East Texas", "West Texas"),
            non_adjacent=("Austin Area", "Houston Metro", "San Antonio Area", "South Texas"),
        ),
        "Houston Metro": RegionAdjacency(
            adjacent=("Austin Area", "East Texas", "South Texas"),
            non_adjacent=("North Texas", "Dallas-Fort Worth Metroplex", "San Antonio Area", "West Texas"),
        ),
        "Austin Area": RegionAdjacency(
            adjacent=("San Antonio Area", "Houston Metro", "Dallas-Fort Worth Metroplex"),
            non_adjacent=("North Texas", "East Texas", "West Texas", "South Texas"),
        ),
        "San Antonio Area": RegionAdjacency(
            adjacent=("Austin Area", "South Texas", "West Texas"),
            non_adjacent=("North Texas", "Dallas-Fort Worth Metroplex", "Houston Metro", "East Texas"),
        ),
        "Dallas-Fort Worth Metroplex": RegionAdjacency(
            adjacent=("North Texas", "Austin Area", "East Texas"),
            non_adjacent=("Houston Metro", "San Antonio Area", "West Texas", "South Texas"),
        ),
        "East Texas": RegionAdjacency(
            adjacent=("North Texas", "Houston Metro", "Dallas-Fort Worth Metroplex"),
            non_adjacent=("Austin Area", "San Antonio Area", "West Texas", "South Texas"),
        ),
        "West Texas": RegionAdjacency(
            adjacent=("North Texas", "San Antonio Area"),
            non_adjacent=("Austin Area", "Houston Metro", "Dallas-Fort Worth Metroplex", "East Texas", "South Texas"),
        ),
        "South Texas": RegionAdjacency(
            adjacent=("San Antonio Area", "Houston Metro"),
            non_adjacent=("North Texas", "Dallas-Fort Worth Metroplex", "Austin Area", "East Texas", "West Texas"),
        ),
    }),
    "FL": MappingProxyType({
        "South Florida": RegionAdjacency(
            adjacent=("Southwest Florida", "Central Florida"),
            non_adjacent=("Jacksonville Area", "Panhandle"),
        ),
        "Central Florida": RegionAdjacency(
            adjacent=("South Florida", "Southwest Florida", "Jacksonville Area"),
            non_adjacent=("Panhandle",),
        ),
        "Jacksonville Area": RegionAdjacency(
            adjacent=("Central Florida", "Panhandle"),
            non_adjacent=("South Florida", "Southwest Florida"),
        ),
        "Southwest Florida": RegionAdjacency(
            adjacent=("South Florida", "Central Florida"),
            non_adjacent=("Jacksonville Area", "Panhandle"),
        ),
        "Panhandle": RegionAdjacency(
            adjacent=("Jacksonville Area", "Central Florida"),
            non_adjacent=("South Florida", "Southwest Florida"),
        ),
    }),
    "CA": MappingProxyType({
        "Bay Area": RegionAdjacency(
            adjacent=("Central Valley", "Northern California"),
            non_adjacent=("Los Angeles Metro", "San Diego Area", "Inland Empire"),
        ),
        "Los Angeles Metro": RegionAdjacency(
            adjacent=("Inland Empire", "San Diego Area", "Central Valley"),
            non_adjacent=("Bay Area", "Northern California"),
        ),
        "San Diego Area": RegionAdjacency(
            adjacent=("Los Angeles Metro", "Inland Empire"),
            non_adjacent=("Bay Area", "Central Valley", "Northern California"),
        ),
        "Central Valley": RegionAdjacency(
            adjacent=("Bay Area", "Los Angeles Metro", "Northern California"),
            non_adjacent=("San Diego Area", "Inland Empire"),
        ),
        "Inland Empire": RegionAdjacency(
            adjacent=("Los Angeles Metro", "San Diego Area", "Central Valley"),
            non_adjacent=("Bay Area", "Northern California"),
        ),
        "Northern California": RegionAdjacency(
            adjacent=("Bay Area", "Central Valley"),
            non_adjacent=("Los Angeles Metro", "San Diego Area", "Inland Empire"),
        ),
    }),
    "OK": MappingProxyType({
        "Oklahoma City Metro": RegionAdjacency(
            adjacent=("Tulsa Area", "Southwest Oklahoma"),
            non_adjacent=("Northeast Oklahoma",),
        ),
        "Tulsa Area": RegionAdjacency(
            adjacent=("Oklahoma City Metro", "Northeast Oklahoma"),
            non_adjacent=("Southwest Oklahoma",),
        ),
        "Southwest Oklahoma": RegionAdjacency(
            adjacent=("Oklahoma City Metro",),
            non_adjacent=("Tulsa Area", "Northeast Oklahoma"),
        ),
        "Northeast Oklahoma": RegionAdjacency(
            adjacent=("Tulsa Area",),
            non_adjacent=("Oklahoma City Metro", "Southwest Oklahoma"),
        ),
    }),
    "MS": MappingProxyType({
        "Jackson Metro": RegionAdjacency(
            adjacent=("Delta Region", "Gulf Coast"),
            non_adjacent=("Northern Mississippi",),
        ),
        "Gulf Coast": RegionAdjacency(
            adjacent=("Jackson Metro",),
            non_adjacent=("Northern Mississippi", "Delta Region"),
        ),
        "Northern Mississippi": RegionAdjacency(
            adjacent=("Delta Region", "Jackson Metro"),
            non_adjacent=("Gulf Coast",),
        ),
        "Delta Region": RegionAdjacency(
            adjacent=("Jackson Metro", "Northern Mississippi"),
            non_adjacent=("Gulf Coast",),
        ),
    }),
    "IL": MappingProxyType({
        "Chicago Metro": RegionAdjacency(
            adjacent=("Northern Illinois", "Central Illinois"),
            non_adjacent=("Southern Illinois",),
        ),
        "Northern Illinois": RegionAdjacency(
            adjacent=("Chicago Metro", "Central Illinois"),
            non_adjacent=("Southern Illinois",),
        ),
        "Central Illinois": RegionAdjacency(
            adjacent=("Chicago Metro", "Northern Illinois", "Southern Illinois"),
            non_adjacent=(),
        ),
        "Southern Illinois": RegionAdjacency(
            adjacent=("Central Illinois",),
            non_adjacent=("Chicago Metro", "Northern Illinois"),
        ),
    }),
    "MO": MappingProxyType({
        "Kansas City Metro": RegionAdjacency(
            adjacent=("Central Missouri",),
            non_adjacent=("St. Louis Metro", "Springfield Area"),
        ),
        "St. Louis Metro": RegionAdjacency(
            adjacent=("Central Missouri",),
            non_adjacent=("Kansas City Metro", "Springfield Area"),
        ),
        "Springfield Area": RegionAdjacency(
            adjacent=("Central Missouri",),
            non_adjacent=("Kansas City Metro", "St. Louis Metro"),
        ),
        "Central Missouri": RegionAdjacency(
            adjacent=("Kansas City Metro", "St. Louis Metro", "Springfield Area"),
            non_adjacent=(),
        ),
    }),
    "VA": MappingProxyType({
        "Northern Virginia": RegionAdjacency(
            adjacent=("Richmond Area",),
            non_adjacent=("Hampton Roads", "Southwest Virginia"),
        ),
        "Richmond Area": RegionAdjacency(
            adjacent=("Northern Virginia", "Hampton Roads", "Southwest Virginia"),
            non_adjacent=(),
        ),
        "Hampton Roads": RegionAdjacency(
            adjacent=("Richmond Area",),
            non_adjacent=("Northern Virginia", "Southwest Virginia"),
        ),
        "Southwest Virginia": RegionAdjacency(
            adjacent=("Richmond Area",),
            non_adjacent=("Northern Virginia", "Hampton Roads"),
        ),
    }),
    "GA": MappingProxyType({
        "Atlanta Metro": RegionAdjacency(
            adjacent=("North Georgia", "Augusta Area", "Columbus Area"),
            non_adjacent=("Savannah Area",),
        ),
        "North Georgia": RegionAdjacency(
            adjacent=("Atlanta Metro",),
            non_adjacent=("Savannah Area", "Augusta Area", "Columbus Area"),
        ),
        "Savannah Area": RegionAdjacency(
            adjacent=("Augusta Area",),
            non_adjacent=("Atlanta Metro", "North Georgia", "Columbus Area"),
        ),
        "Augusta Area": RegionAdjacency(
            adjacent=("Atlanta Metro", "Savannah Area"),
            non_adjacent=("North Georgia", "Columbus Area"),
        ),
        "Columbus Area": RegionAdjacency(
            adjacent=("Atlanta Metro",),
            non_adjacent=("North Georgia", "Savannah Area", "Augusta Area"),
        ),
    }),
    "NC": MappingProxyType({
        "Charlotte Metro": RegionAdjacency(
            adjacent=("Greensboro Area", "Western NC"),
            non_adjacent=("Raleigh-Durham-Chapel Hill", "Coastal"),
        ),
        "Raleigh-Durham-Chapel Hill": RegionAdjacency(
            adjacent=("Greensboro Area", "Coastal"),
            non_adjacent=("Charlotte Metro", "Western NC"),
        ),
        "Greensboro Area": RegionAdjacency(
            adjacent=("Charlotte Metro", "Raleigh-Durham-Chapel Hill", "Western NC"),
            non_adjacent=("Coastal",),
        ),
        "Coastal": RegionAdjacency(
            adjacent=("Raleigh-Durham-Chapel Hill",),
            non_adjacent=("Charlotte Metro", "Greensboro Area", "Western NC"),
        ),
        "Western NC": RegionAdjacency(
            adjacent=("Charlotte Metro", "Greensboro Area"),
            non_adjacent=("Raleigh-Durham-Chapel Hill", "Coastal"),
        ),
    }),
    "NY": MappingProxyType({
        "New York City": RegionAdjacency(
            adjacent=("Long Island", "Hudson Valley"),
            non_adjacent=("Buffalo Area", "Rochester-Syracuse"),
        ),
        "Long Island": RegionAdjacency(
            adjacent=("New York City",),
            non_adjacent=("Hudson Valley", "Buffalo Area", "Rochester-Syracuse"),
        ),
        "Hudson Valley": RegionAdjacency(
            adjacent=("New York City", "Rochester-Syracuse"),
            non_adjacent=("Long Island", "Buffalo Area"),
        ),
        "Buffalo Area": RegionAdjacency(
            adjacent=("Rochester-Syracuse",),
            non_adjacent=("New York City", "Long Island", "Hudson Valley"),
        ),
        "Rochester-Syracuse": RegionAdjacency(
            adjacent=("Hudson Valley", "Buffalo Area"),
            non_adjacent=("New York City", "Long Island"),
        ),
    }),
    "CO": MappingProxyType({
        "Denver Metro": RegionAdjacency(
            adjacent=("Front Range", "Western Colorado"),
            non_adjacent=("Southern Colorado",),
        ),
        "Front Range": RegionAdjacency(
            adjacent=("Denver Metro", "Western Colorado"),
            non_adjacent=("Southern Colorado",),
        ),
        "Western Colorado": RegionAdjacency(
            adjacent=("Denver Metro", "Front Range", "Southern Colorado"),
            non_adjacent=(),
        ),
        "Southern Colorado": RegionAdjacency(
            adjacent=("Denver Metro", "Western Colorado"),
            non_adjacent=("Front Range",),
        ),
    }),
    "WA": MappingProxyType({
        "Seattle Metro": RegionAdjacency(
            adjacent=("Tacoma Area", "Central Washington"),
            non_adjacent=("Vancouver Area", "Spokane Area"),
        ),
        "Tacoma Area": RegionAdjacency(
            adjacent=("Seattle Metro", "Vancouver Area"),
            non_adjacent=("Central Washington", "Spokane Area"),
        ),
        "Vancouver Area": RegionAdjacency(
            adjacent=("Tacoma Area",),
            non_adjacent=("Seattle Metro", "Central Washington", "Spokane Area"),
        ),
        "Spokane Area": RegionAdjacency(
            adjacent=("Central Washington",),
            non_adjacent=("Seattle Metro", "Tacoma Area", "Vancouver Area"),
        ),
        "Central Washington": RegionAdjacency(
            adjacent=("Seattle Metro", "Spokane Area"),
            non_adjacent=("Tacoma Area", "Vancouver Area"),
        ),
    }),
    "LA": MappingProxyType({
        "New Orleans Metro": RegionAdjacency(
            adjacent=("Baton Rouge Area", "Acadiana"),
            non_adjacent=("Shreveport-Bossier",),
        ),
        "Baton Rouge Area": RegionAdjacency(
            adjacent=("New Orleans Metro", "Acadiana"),
            non_adjacent=("Shreveport-Bossier",),
        ),
        "Shreveport-Bossier": RegionAdjacency(
            adjacent=(),
            non_adjacent=("New Orleans Metro", "Baton Rouge Area", "Acadiana"),
        ),
        "Acadiana": RegionAdjacency(
            adjacent=("New Orleans Metro", "Baton Rouge Area"),
            non_adjacent=("Shreveport-Bossier",),
        ),
    }),
})


# =============================================================================
# Geography lookup
# =============================================================================


class RegionGeography:
    """
    ZIP, state, region and adjacency lookups over immutable tables.

    All lookups are total: unknown inputs give ``None`` or empty lists.
    """

    def __init__(
        self,
        zip_ranges: Mapping[str, Tuple[Tuple[int, int], ...]] = ZIP_PREFIX_RANGES,
        region_prefixes: Mapping[str, Mapping[str, Tuple[str, ...]]] = STATE_REGION_ZIP_PREFIXES,
        adjacency: Mapping[str, Mapping[str, RegionAdjacency]] = REGION_ADJACENCY,
    ):
        self._zip_ranges = zip_ranges
        self._region_prefixes = region_prefixes
        self._adjacency = adjacency

    def state_from_zip(self, zip_code: Optional[str]) -> Optional[str]:
        """Map a ZIP code to its state code by 3-digit prefix range."""
        if zip_code is None:
            return None
        digits = str(zip_code).strip()
        if not digits.isdigit():
            return None
        prefix = int(digits.zfill(5)[:3])
        for state, ranges in self._zip_ranges.items():
            for low, high in ranges:
                if low <= prefix <= high:
                    return state
        return None

    def find_region_by_zip(self, zip_code: Optional[str]) -> Optional[Tuple[str, str]]:
        """
        Return (state, region) for the first region claiming the ZIP's prefix.

        Some prefixes are listed under more than one region; table order decides.
        """
        if not zip_code:
            return None
        prefix = str(zip_code).strip()[:3]
        for state, regions in self._region_prefixes.items():
            for region, prefixes in regions.items():
                if prefix in prefixes:
                    return state, region
        return None

    def regions_for_state(self, state: str) -> List[str]:
        if not state:
            return []
        return list(self._region_prefixes.get(state.upper(), {}).keys())

    def states_with_regions(self) -> List[str]:
        return list(self._region_prefixes.keys())

    def adjacency_for(self, state: str, region: str) -> Optional[RegionAdjacency]:
        if not state or not region:
            return None
        return self._adjacency.get(state.upper(), {}).get(region)

    def adjacent_regions(self, state: str, region: str) -> List[str]:
        adjacency = self.adjacency_for(state, region)
        return list(adjacency.adjacent) if adjacency else []

    def non_adjacent_regions(self, state: str, region: str) -> List[str]:
        adjacency = self.adjacency_for(state, region)
        return list(adjacency.non_adjacent) if adjacency else []

    def is_adjacent(self, state: str, home_region: str, region: str) -> bool:
        return region in self.adjacent_regions(state, home_region)

    def region_allocation_by_plan(
        self,
        state: str,
        home_region: str,
        plan_type: RegionPlanType,
    ) -> RegionAllocationPlan:
        """
        Regions bundled with a plan around a home region.

        - standard: 2 adjacent included, 1 non-adjacent selectable (4 total)
        - premium: 4 adjacent included, 4 non-adjacent selectable (9 total)
        - build_your_own: everything selectable, nothing included
        """
        adjacency = self.adjacency_for(state, home_region)
        if adjacency is None:
            return RegionAllocationPlan(homeRegion=home_region, totalRegions=1)

        plan_type = RegionPlanType(plan_type)
        if plan_type == RegionPlanType.STANDARD:
            return RegionAllocationPlan(
                homeRegion=home_region,
                includedAdjacent=list(adjacency.adjacent[:2]),
                selectableNonAdjacent=list(adjacency.non_adjacent[:1]),
                totalRegions=4,
            )
        if plan_type == RegionPlanType.PREMIUM:
            return RegionAllocationPlan(
                homeRegion=home_region,
                includedAdjacent=list(adjacency.adjacent[:4]),
                selectableNonAdjacent=list(adjacency.non_adjacent[:4]),
                totalRegions=9,
            )
        return RegionAllocationPlan(
            homeRegion=home_region,
            selectableAdjacent=list(adjacency.adjacent),
            selectableNonAdjacent=list(adjacency.non_adjacent),
            totalRegions=0,
        )


default_geography = RegionGeography()


def get_state_from_zip(zip_code: Optional[str]) -> Optional[str]:
    return default_geography.state_from_zip(zip_code)
