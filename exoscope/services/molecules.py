from types import MappingProxyType
from typing import Mapping, Tuple

Window = Tuple[float, float]

# Absorption windows (nm) searched for each molecule, in evaluation order
MOLECULE_WINDOWS: Mapping[str, Tuple[Window, ...]] = MappingProxyType({
    "H2O": ((590, 600), (650, 662), (720, 740), (940, 980)),
    "CO2": ((660, 672), (720, 740), (1400, 1600)),
    "CH4": ((530, 555), (780, 805), (1200, 1300)),
    "O2": ((687, 695), (760, 770)),
    "N2": ((516, 532),),
    "SO2": ((400, 430), (280, 320)),
    "NH3": ((645, 665), (1000, 1080)),
    "Na": ((588, 590),),
    "K": ((766, 770),),
    "O3": ((255, 320),),
})


def freeze_windows(windows: Mapping) -> Mapping[str, Tuple[Window, ...]]:
    """Copy a molecule -> windows mapping into an immutable table"""
    return MappingProxyType({
        molecule: tuple((float(lo), float(hi)) for lo, hi in ranges)
        for molecule, ranges in windows.items()
    })
