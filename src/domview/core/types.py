# Copyright 2024 Rostlab.
# SPDX-License-Identifier: Apache-2.0
from enum import Enum


class ChainType(str, Enum):
    PROTEIN = "protein"
    NUCLEIC_ACID = "nucleic-acid"
    UNKNOWN = "unknown"


class Representation(str, Enum):
    CARTOON = "cartoon"
    BALL_AND_STICK = "ball-and-stick"
    SURFACE = "surface"
    SPACEFILL = "spacefill"
    STICK = "stick"
    SPHERE = "sphere"
    LINE = "line"


class StructureFormat(str, Enum):
    MMCIF = "mmcif"
    PDB = "pdb"


class ViewerState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    CLASSIFYING = "classifying"
    STYLING = "styling"
    READY = "ready"
    ERROR = "error"
