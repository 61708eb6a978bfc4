"""
Body-map locations.
Region codes recorded by the wound location picker, and the location
facts the rules engine depends on.
"""
from typing import Optional


class AnatomicalLocation:
    # Front view
    FRONT_HEAD = "front_head"
    FRONT_NECK = "front_neck"
    FRONT_LEFT_SHOULDER = "front_left_shoulder"
    FRONT_RIGHT_SHOULDER = "front_right_shoulder"
    FRONT_LEFT_CHEST = "front_left_chest"
    FRONT_RIGHT_CHEST = "front_right_chest"
    FRONT_LEFT_ELBOW = "front_left_elbow"
    FRONT_RIGHT_ELBOW = "front_right_elbow"
    FRONT_LEFT_FOREARM = "front_left_forearm"
    FRONT_RIGHT_FOREARM = "front_right_forearm"
    ABDOMEN = "abdomen"
    LEFT_HIP = "left_hip"
    RIGHT_HIP = "right_hip"
    LEFT_THIGH = "left_thigh"
    RIGHT_THIGH = "right_thigh"
    FRONT_LEFT_KNEE = "front_left_knee"
    FRONT_RIGHT_KNEE = "front_right_knee"
    LEFT_SHIN = "left_shin"
    RIGHT_SHIN = "right_shin"
    LEFT_ANKLE = "left_ankle"
    RIGHT_ANKLE = "right_ankle"
    FRONT_LEFT_TOES = "front_left_toes"
    FRONT_RIGHT_TOES = "front_right_toes"
    LEFT_FOOT = "left_foot"
    RIGHT_FOOT = "right_foot"

    # Back view
    BACK_HEAD = "back_head"
    LEFT_SCAPULA = "left_scapula"
    RIGHT_SCAPULA = "right_scapula"
    BACK_LEFT_ELBOW = "back_left_elbow"
    BACK_RIGHT_ELBOW = "back_right_elbow"
    LEFT_LOWER_BACK = "left_lower_back"
    RIGHT_LOWER_BACK = "right_lower_back"
    SACRUM = "sacrum"
    LEFT_BUTTOCK = "left_buttock"
    RIGHT_BUTTOCK = "right_buttock"
    LEFT_HAMSTRING = "left_hamstring"
    RIGHT_HAMSTRING = "right_hamstring"
    LEFT_CALF = "left_calf"
    RIGHT_CALF = "right_calf"
    LEFT_HEEL = "left_heel"
    RIGHT_HEEL = "right_heel"

    ALL = [
        FRONT_HEAD, FRONT_NECK, FRONT_LEFT_SHOULDER, FRONT_RIGHT_SHOULDER,
        FRONT_LEFT_CHEST, FRONT_RIGHT_CHEST, FRONT_LEFT_ELBOW, FRONT_RIGHT_ELBOW,
        FRONT_LEFT_FOREARM, FRONT_RIGHT_FOREARM, ABDOMEN, LEFT_HIP, RIGHT_HIP,
        LEFT_THIGH, RIGHT_THIGH, FRONT_LEFT_KNEE, FRONT_RIGHT_KNEE, LEFT_SHIN,
        RIGHT_SHIN, LEFT_ANKLE, RIGHT_ANKLE, FRONT_LEFT_TOES, FRONT_RIGHT_TOES,
        LEFT_FOOT, RIGHT_FOOT, BACK_HEAD, LEFT_SCAPULA, RIGHT_SCAPULA,
        BACK_LEFT_ELBOW, BACK_RIGHT_ELBOW, LEFT_LOWER_BACK, RIGHT_LOWER_BACK,
        SACRUM, LEFT_BUTTOCK, RIGHT_BUTTOCK, LEFT_HAMSTRING, RIGHT_HAMSTRING,
        LEFT_CALF, RIGHT_CALF, LEFT_HEEL, RIGHT_HEEL,
    ]


# Region codes are matched by substring so that free-form codes such as
# "heel_plantar" or "lower_leg" still resolve.
FOOT_KEYWORDS = ("foot", "heel", "toe")
LOWER_LIMB_KEYWORDS = FOOT_KEYWORDS + ("thigh", "knee", "shin", "calf", "hamstring", "leg", "ankle")
LOWER_LEG_KEYWORDS = ("lower_leg", "ankle", "shin", "calf")
PRESSURE_PRONE_KEYWORDS = ("sacrum", "heel", "elbow", "hip", "buttock")


def _matches(region_code: Optional[str], keywords) -> bool:
    if not region_code:
        return False
    region = region_code.strip().lower()
    return any(k in region for k in keywords)


def is_foot_region(region_code: Optional[str]) -> bool:
    return _matches(region_code, FOOT_KEYWORDS)


def is_lower_limb_region(region_code: Optional[str]) -> bool:
    return _matches(region_code, LOWER_LIMB_KEYWORDS)


def is_lower_leg_region(region_code: Optional[str]) -> bool:
    return _matches(region_code, LOWER_LEG_KEYWORDS)


def is_pressure_prone_region(region_code: Optional[str]) -> bool:
    return _matches(region_code, PRESSURE_PRONE_KEYWORDS)
