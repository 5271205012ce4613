"""Vehicle classification enums."""

from enum import Enum


class BodyType(str, Enum):
    SUV = "SUV"
    SEDAN = "Sedan"
    HATCHBACK = "Hatchback"
    COUPE = "Coupe"
    EV = "EV"
    SPORTS = "Sports"
    SUPERCAR = "Supercar"
    CONVERTIBLE = "Convertible"
    WAGON = "Wagon"
    PICKUP = "Pickup"
    MPV = "MPV"


class FuelType(str, Enum):
    PETROL = "Petrol"
    DIESEL = "Diesel"
    EV = "EV"
    HYBRID = "Hybrid"
    CNG = "CNG"
    LPG = "LPG"


class Transmission(str, Enum):
    MANUAL = "Manual"
    AUTOMATIC = "Automatic"
    DCT = "DCT"
    CVT = "CVT"
    AMT = "AMT"


class DriveType(str, Enum):
    FWD = "FWD"
    RWD = "RWD"
    AWD = "AWD"
    FOUR_WD = "4WD"


class Aspiration(str, Enum):
    NA = "NA"
    TURBO = "Turbo"
    SUPERCHARGED = "Supercharged"
    TWIN_TURBO = "Twin-Turbo"
    ELECTRIC = "Electric"
