"""
Default values and lookup tables used when repairing FIT exports.
"""

from types import MappingProxyType

# Gap between two records, in seconds, above which the device was paused.
PAUSE_THRESHOLD_SECONDS = 60

# Timer events at internal lap boundaries are moved this far away from the
# neighbouring record so they never share its timestamp.
TIMER_OFFSET_SECONDS = 1

# Record field used to weight the calorie split between laps.
INTENSITY_FIELD = "power"

# Distributed lap energies add up to the requested total within this
# relative tolerance.
ENERGY_RELATIVE_TOLERANCE = 1e-6

# Messages copied to the output unchanged. Everything else that is not
# file_id, record, lap or session is rejected.
PASSTHROUGH_MESSAGES = frozenset({"device_info", "sport", "user_profile", "zones_target"})

# Record message fields keyed by name, valued by their FIT profile field
# number. Some decoders only read record fields emitted in this order.
RECORD_FIELD_ORDER = MappingProxyType(
    {
        "position_lat": 0,
        "position_long": 1,
        "altitude": 2,
        "heart_rate": 3,
        "cadence": 4,
        "distance": 5,
        "speed": 6,
        "power": 7,
        "compressed_speed_distance": 8,
        "grade": 9,
        "resistance": 10,
        "time_from_course": 11,
        "cycle_length": 12,
        "temperature": 13,
        "speed_1s": 17,
        "cycles": 18,
        "total_cycles": 19,
        "compressed_accumulated_power": 28,
        "accumulated_power": 29,
        "left_right_balance": 30,
        "gps_accuracy": 31,
        "vertical_speed": 32,
        "calories": 33,
        "vertical_oscillation": 39,
        "stance_time_percent": 40,
        "stance_time": 41,
        "activity_type": 42,
        "left_torque_effectiveness": 43,
        "right_torque_effectiveness": 44,
        "left_pedal_smoothness": 45,
        "right_pedal_smoothness": 46,
        "combined_pedal_smoothness": 47,
        "time128": 48,
        "stroke_type": 49,
        "zone": 50,
        "ball_speed": 51,
        "cadence256": 52,
        "fractional_cadence": 53,
        "total_hemoglobin_conc": 54,
        "total_hemoglobin_conc_min": 55,
        "total_hemoglobin_conc_max": 56,
        "saturated_hemoglobin_percent": 57,
        "saturated_hemoglobin_percent_min": 58,
        "saturated_hemoglobin_percent_max": 59,
        "device_index": 62,
        "left_pco": 67,
        "right_pco": 68,
        "left_power_phase": 69,
        "left_power_phase_peak": 70,
        "right_power_phase": 71,
        "right_power_phase_peak": 72,
        "enhanced_speed": 73,
        "enhanced_altitude": 78,
        "battery_soc": 81,
        "motor_power": 82,
        "vertical_ratio": 83,
        "stance_time_balance": 84,
        "step_length": 85,
        "cycle_length16": 87,
        "absolute_pressure": 91,
        "depth": 92,
        "next_stop_depth": 93,
        "next_stop_time": 94,
        "time_to_surface": 95,
        "ndl_time": 96,
        "cns_load": 97,
        "n2_load": 98,
        "respiration_rate": 99,
        "enhanced_respiration_rate": 108,
        "grit": 114,
        "flow": 115,
        "current_stress": 116,
        "ebike_travel_range": 117,
        "ebike_battery_level": 118,
        "ebike_assist_mode": 119,
        "ebike_assist_level_percent": 120,
        "air_time_remaining": 123,
        "pressure_sac": 124,
        "volume_sac": 125,
        "rmv": 126,
        "ascent_rate": 127,
        "po2": 129,
        "core_temperature": 139,
        "timestamp": 253,
    }
)

# Timer event tags
TIMER_EVENT = "timer"
TIMER_TRIGGER = "auto"
TIMER_EVENT_GROUP = 0
EVENT_TYPE_START = "start"
EVENT_TYPE_STOP_ALL = "stop_all"

# The exporting app fills these with generic or wrong values, so the
# rewritten summaries always use these instead.
CORRECTED_SPORT = "e_biking"
CORRECTED_SUB_SPORT = "generic"
SESSION_OVERRIDES = MappingProxyType(
    {
        "event": "session",
        "event_type": "stop",
        "trigger": "activity_end",
        "sport": CORRECTED_SPORT,
        "sub_sport": CORRECTED_SUB_SPORT,
    }
)

ACTIVITY_OVERRIDES = MappingProxyType(
    {
        "num_sessions": 1,
        "type": "manual",
        "event": "activity",
        "event_type": "stop",
    }
)

# Session fields recomputed from the records. The source values are dropped.
SESSION_TIMING_FIELDS = frozenset(
    {
        "timestamp",
        "start_time",
        "total_elapsed_time",
        "total_timer_time",
        "total_moving_time",
        "total_calories",
        "total_fat_calories",
        "num_laps",
        "first_lap_index",
        "time_in_hr_zone",
        "time_in_power_zone",
        "time_in_speed_zone",
        "time_in_cadence_zone",
    }
)

# Message fields holding a date_time value
TIMESTAMP_FIELDS = frozenset({"timestamp", "start_time", "time_created"})
