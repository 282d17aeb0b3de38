# Named shift times offered by the calendar picker: key -> (start, end)
SHIFT_TEMPLATES = {
    "ranni": ("06:00", "14:00"),
    "denni": ("09:00", "17:00"),
    "odpoledni": ("14:00", "22:00"),
    "vecerni": ("17:00", "01:00"),
}
CUSTOM_TEMPLATE = "custom"

DEFAULT_POSITION = "Číšník"

# Default window of the shift list: shifts from a week ago onwards
SHIFT_LIST_LOOKBACK_DAYS = 7

DASHBOARD_SHIFTS = 5
DASHBOARD_TASKS = 5
DASHBOARD_ANNOUNCEMENTS = 3

GALLERY_PAGE_SIZE = 50
GALLERY_PREFIX = "gallery"
