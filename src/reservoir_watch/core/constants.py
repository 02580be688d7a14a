"""
Application-wide constants for reservoir watch.

Default endpoints, policy thresholds and the built-in monitored sites.
"""

# Upstream endpoints
USGS_API_BASE_URL = "https://api.waterdata.usgs.gov/ogcapi/v0"
CDEC_RELAY_BASE_URL = "https://cdec-proxy.vercel.app"

# HTTP
DEFAULT_TIMEOUT = 30  # seconds

# Processing
DEFAULT_TIMEZONE = "America/Los_Angeles"
STALE_THRESHOLD_DAYS = 7  # data older than this many whole days is stale
DEFAULT_RANGE_DAYS = 365

# Lake Piru (approximate full capacity)
LAKE_PIRU_CAPACITY_ACFT = 83240

# USGS parameter codes
PARAM_RESERVOIR_STORAGE = "00054"  # acre-feet
PARAM_DISCHARGE = "00060"  # cubic feet per second

# CDEC sensor numbers
SENSOR_RESERVOIR_OUTFLOW = "23"

DEFAULT_SITES = [
    {
        "key": "lake_piru_storage",
        "site_id": "11109700",  # LK PIRU NR PIRU CA
        "parameter_code": PARAM_RESERVOIR_STORAGE,
        "api_flavor": "feature_collection",
        "display_name": "Lake Piru",
        "value_label": "storage",
        "unit_label": "ac-ft",
        "capacity": LAKE_PIRU_CAPACITY_ACFT,
        "chart_color": "rgba(75, 192, 192, 1)",
    },
    {
        "key": "piru_creek_discharge",
        "site_id": "11109800",  # PIRU CREEK BLW SANTA FELICIA DAM CA
        "parameter_code": PARAM_DISCHARGE,
        "api_flavor": "feature_collection",
        "display_name": "Piru Creek below Santa Felicia Dam",
        "value_label": "discharge",
        "unit_label": "ft³/s",
        "chart_color": "rgba(255, 99, 132, 1)",
    },
    {
        "key": "castaic_outflow",
        "site_id": "CAS",
        "parameter_code": SENSOR_RESERVOIR_OUTFLOW,
        "api_flavor": "flat_array",
        "duration_code": "H",
        "display_name": "Castaic Reservoir",
        "value_label": "outflow",
        "unit_label": "cfs",
        "max_points": 10,
        "chart_color": "rgba(54, 162, 235, 1)",
    },
]
