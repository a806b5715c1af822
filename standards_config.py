# standards_config.py

# --- Heavy Metal Standards (mg/L) ---
# WHO/EPA permissible limits for drinking water. A metal that is not listed
# here is ignored by the HMPI calculation.
METAL_STANDARDS = {
    'Lead': 0.01,
    'Mercury': 0.001,
    'Cadmium': 0.003,
    'Arsenic': 0.01,
    'Chromium': 0.05,
    'Copper': 2.0,
    'Zinc': 3.0,
    'Nickel': 0.07,
}

# --- HMPI Contamination Levels ---
# Evaluated high to low. Each band is closed on its upper bound:
# Very High: > 300
# High: > 150 to <= 300
# Moderate: > 100 to <= 150
# Low: <= 100
HMPI_VERY_HIGH_MIN = 300
HMPI_HIGH_MIN = 150
HMPI_MODERATE_MIN = 100

CONTAMINATION_LEVELS = ('low', 'moderate', 'high', 'very_high')

# --- Alerting ---
# A calculation above ALERT_THRESHOLD raises an alert. Above
# CRITICAL_THRESHOLD the alert is 'critical', otherwise 'high'.
ALERT_THRESHOLD = 150
CRITICAL_THRESHOLD = 300

# --- Compliance ---
# A sample is compliant when its HMPI is at or below the limit.
COMPLIANCE_LIMIT = 100
CRITICAL_VIOLATION_MIN = 300
REGIONAL_HIGH_RISK_MIN = 200

# Project compliance labels, by compliance rate (%).
COMPLIANT_RATE_MIN = 90
WARNING_RATE_MIN = 70

# --- HMPI Distribution Bands (for charts) ---
# (label, upper bound inclusive). The last band has no upper bound.
HMPI_DISTRIBUTION_BANDS = [
    ('Excellent (0-50)', 50),
    ('Good (51-100)', 100),
    ('Moderate (101-200)', 200),
    ('Poor (201-300)', 300),
    ('Very Poor (>300)', None),
]

# --- Data Entry Defaults ---
# The metal panel shown on the data entry form, with the detection limit
# of the default analysis method.
DEFAULT_ANALYSIS_METHOD = 'ICP-MS'
DEFAULT_METAL_PANEL = [
    {'metal_type': 'Lead', 'detection_limit': 0.001},
    {'metal_type': 'Mercury', 'detection_limit': 0.0001},
    {'metal_type': 'Cadmium', 'detection_limit': 0.0005},
    {'metal_type': 'Arsenic', 'detection_limit': 0.001},
    {'metal_type': 'Chromium', 'detection_limit': 0.001},
    {'metal_type': 'Copper', 'detection_limit': 0.001},
    {'metal_type': 'Zinc', 'detection_limit': 0.001},
    {'metal_type': 'Nickel', 'detection_limit': 0.001},
]

# A sample is counted as a contaminated site on the scientist dashboard
# when its pH is below this value.
CONTAMINATED_PH_MAX = 6.5
