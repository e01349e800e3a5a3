from enum import Enum

class BoundCondition(str, Enum):
    GT = "GT"      # strictly greater than minLength
    GTE = "GTE"    # greater than or equal to minLength
    LT = "LT"      # strictly less than maxLength
    LTE = "LTE"    # less than or equal to maxLength

class SamplingPoint(str, Enum):
    FRONT_END = "Front End"
    BACK_END = "Back End"
    OTHER = "Other"

class DefectType(str, Enum):
    YELLOW = "yellow"
    PADDY = "paddy"
    DAMAGED = "damaged"
    GLUTINOUS = "glutinous"
    CHALKY = "chalky"
    RED = "red"
