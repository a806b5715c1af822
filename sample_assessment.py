# sample_assessment.py
"""
The HMPI workflow for one stored sample: load its readings, calculate,
save the result to the history, and raise an alert when needed.
"""
import logging

from alerter import raise_contamination_alert
from database import get_heavy_metals_for_sample, get_sample_by_id, save_calculation
from hmpi_calculator import calculate_hmpi

logger = logging.getLogger(__name__)


def readings_from_rows(metal_rows):
    """Turns heavy_metals rows into the {metal: concentration} mapping the calculator expects."""
    return {row['metal_type']: row['concentration_mg_l'] for row in metal_rows}


def assess_sample(sample_id, user_id=None):
    """
    Runs and records an HMPI calculation for a stored sample.

    Raises:
        LookupError: The sample does not exist.
        ValueError: The sample has no heavy metal readings.

    Returns:
        dict: The calculator result plus 'sample_id', 'calculation_id' and
        'alert_id' (None when no alert was raised).
    """
    sample = get_sample_by_id(sample_id)
    if sample is None:
        raise LookupError(f"Sample {sample_id} not found.")

    metal_rows = get_heavy_metals_for_sample(sample_id)
    if not metal_rows:
        raise ValueError(f"Sample '{sample['sample_name']}' has no heavy metal readings to calculate.")

    result = calculate_hmpi(readings_from_rows(metal_rows))
    calculation_id = save_calculation(sample_id, result, calculated_by=user_id)
    logger.info(
        "HMPI for sample %s (%s): %.3f [%s]",
        sample_id, sample['sample_name'], result['hmpi_value'], result['contamination_level']
    )

    alert_id = raise_contamination_alert(sample, result['hmpi_value'])

    result.update({
        'sample_id': sample_id,
        'calculation_id': calculation_id,
        'alert_id': alert_id,
    })
    return result
