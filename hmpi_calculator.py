# hmpi_calculator.py
"""
Heavy Metal Pollution Index (HMPI) calculation.

Turns the heavy metal readings of one water sample into a single index
value, a contamination level and a list of recommendations. The functions
here are pure: persistence and alerting are done by the caller
(see sample_assessment.py).
"""
from standards_config import (
    ALERT_THRESHOLD,
    CRITICAL_THRESHOLD,
    HMPI_HIGH_MIN,
    HMPI_MODERATE_MIN,
    HMPI_VERY_HIGH_MIN,
    METAL_STANDARDS,
)

# --- Recommendation Texts ---
TREATMENT_REQUIRED = "Immediate water treatment required"
MONITORING_RECOMMENDED = "Regular monitoring recommended"
LEAD_DETECTED = "Lead contamination detected - check plumbing systems"
MERCURY_DETECTED = "Mercury contamination - investigate industrial sources"
WITHIN_LIMITS = "Water quality within acceptable limits"
CONTINUE_MONITORING = "Continue regular monitoring"


def calculate_hmpi(readings, standards=None):
    """
    Calculates the HMPI for one sample.

    Args:
        readings (dict): Metal name -> measured concentration in mg/L.
        standards (dict): Metal name -> permissible limit in mg/L.
            Defaults to METAL_STANDARDS.

    Returns:
        dict: {
            'hmpi_value': float,
            'contamination_level': 'low' | 'moderate' | 'high' | 'very_high',
            'metal_contributions': {metal: percent of its own standard},
            'recommendations': [str, ...]
        }

    Each metal is weighted by 1/standard, and that weight is applied to the
    concentration ratio before summing, so stricter standards dominate the
    result. Metals without a standard are skipped. With no usable reading
    the index is 0.
    """
    if standards is None:
        standards = METAL_STANDARDS

    total_weighted = 0.0
    total_weight = 0.0
    contributions = {}

    for metal, concentration in readings.items():
        standard = standards.get(metal)
        if not standard:
            continue
        ratio = concentration / standard
        weight = 1 / standard
        total_weighted += ratio * weight
        total_weight += weight
        contributions[metal] = ratio * 100

    hmpi_value = total_weighted / total_weight if total_weight > 0 else 0.0

    return {
        'hmpi_value': hmpi_value,
        'contamination_level': classify_hmpi(hmpi_value),
        'metal_contributions': contributions,
        'recommendations': generate_recommendations(hmpi_value, contributions),
    }


def classify_hmpi(hmpi_value):
    """Maps an HMPI value to its contamination level."""
    if hmpi_value > HMPI_VERY_HIGH_MIN:
        return 'very_high'
    if hmpi_value > HMPI_HIGH_MIN:
        return 'high'
    if hmpi_value > HMPI_MODERATE_MIN:
        return 'moderate'
    return 'low'


def generate_recommendations(hmpi_value, contributions):
    """
    Builds the ordered recommendation list. The overall-index rules and the
    per-metal rules are independent, so a low index can still carry a lead
    or mercury warning.
    """
    recommendations = []
    if hmpi_value > HMPI_MODERATE_MIN:
        recommendations.append(TREATMENT_REQUIRED)
        recommendations.append(MONITORING_RECOMMENDED)
    if contributions.get('Lead', 0) > 100:
        recommendations.append(LEAD_DETECTED)
    if contributions.get('Mercury', 0) > 100:
        recommendations.append(MERCURY_DETECTED)
    if hmpi_value <= HMPI_MODERATE_MIN:
        recommendations.append(WITHIN_LIMITS)
        recommendations.append(CONTINUE_MONITORING)
    return recommendations


def alert_severity_for(hmpi_value):
    """Returns the alert severity for an HMPI value, or None if no alert is needed."""
    if hmpi_value <= ALERT_THRESHOLD:
        return None
    return 'critical' if hmpi_value > CRITICAL_THRESHOLD else 'high'


def risk_label(hmpi_value):
    """Short human-readable risk label shown next to a result."""
    if hmpi_value <= HMPI_MODERATE_MIN:
        return "Acceptable"
    if hmpi_value <= HMPI_HIGH_MIN:
        return "Moderate Risk"
    if hmpi_value > HMPI_VERY_HIGH_MIN:
        return "Critical Risk"
    return "High Risk"
