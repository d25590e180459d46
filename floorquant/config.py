"""Global configuration: labels, numbering, reference rows, defaults."""

import re

# Floor numbers of penthouse levels start above every ground floor
PH_FLOOR_BASE = 1000

# Highest ground floor that can anchor the setting-floor cascade
SETTING_FLOOR_MAX = 5

# "코어2-13F" -> core 2, "13F"
CORE_PREFIX_RE = re.compile(r"^코어(\d+)-")
GROUND_LABEL_RE = re.compile(r"^(\d+)F$")
BASEMENT_LABEL_RE = re.compile(r"^B(\d+)$")
PH_LABEL_RE = re.compile(r"^PH(\d+)$")
PH_DISPLAY_RE = re.compile(r"^옥탑(\d+)$")
RANGE_LABEL_RE = re.compile(r"(\d+)~(\d+)F")
STANDARD_SUFFIX_RE = re.compile(r"\s*기준층\s*$")

# Synthetic floor id for the 버림 / 기초 rows, which have no physical floor
GROUP_FLOOR_PREFIX = "group-"

# Synthetic floor id holding the default values of a derived range
RANGE_FLOOR_PREFIX = "range-"

# Reference mini-language: one term, e.g. "F8*0.45"
REFERENCE_TERM_RE = re.compile(r"^([A-Z])(\d+)(?:\*(\d+(?:\.\d+)?|\.\d+))?$")

# Row numbers of the quantity sheet
ROW_BLINDING = 6
ROW_FOUNDATION = 7
ROW_BASEMENT_2 = 8
ROW_BASEMENT_1 = 9
ROW_FLOOR_1 = 11
ROW_FLOOR_2 = 12
ROW_STANDARD_FIRST = 13
ROW_STANDARD_LAST = 25
ROW_PH_FIRST = 26
ROW_PH_LAST = 28

# Persistence windows (seconds)
CELL_DEBOUNCE_SECONDS = 0.5
FORM_AUTOSAVE_SECONDS = 3.0

# Concrete pump cars that can pour at once unless the building says otherwise
DEFAULT_PUMP_CAR_COUNT = 2

# Used by the basic-info form when a penthouse height is missing
DEFAULT_PH_HEIGHT = 2650.0
