"""
Shared Core Types

Supported conditions and the status flag carried by every derived result.
"""
from enum import Enum

from .errors import UnknownDiseaseError


class Disease(str, Enum):
    """Supported autoimmune conditions."""
    RHEUMATOID_ARTHRITIS = "rheumatoid_arthritis"
    PSORIASIS = "psoriasis"
    CROHNS_DISEASE = "crohns_disease"
    TYPE1_DIABETES = "type1_diabetes"
    MULTIPLE_SCLEROSIS = "multiple_sclerosis"
    LUPUS = "lupus"
    SJOGRENS_SYNDROME = "sjogrens_syndrome"
    AUTOIMMUNE_THYROID = "autoimmune_thyroid"

    @classmethod
    def from_string(cls, name: str) -> "Disease":
        """Parse disease name string to enum with common aliases."""
        name_lower = name.strip().lower().replace(" ", "_").replace("-", "_").replace("'", "")
        
        mapping = {
            "ra": cls.RHEUMATOID_ARTHRITIS,
            "rheumatoid": cls.RHEUMATOID_ARTHRITIS,
            "rheumatoidarthritis": cls.RHEUMATOID_ARTHRITIS,
            "psoriasis": cls.PSORIASIS,
            "pso": cls.PSORIASIS,
            "crohn": cls.CROHNS_DISEASE,
            "crohns": cls.CROHNS_DISEASE,
            "crohnsdisease": cls.CROHNS_DISEASE,
            "t1d": cls.TYPE1_DIABETES,
            "type1diabetes": cls.TYPE1_DIABETES,
            "type_1_diabetes": cls.TYPE1_DIABETES,
            "ms": cls.MULTIPLE_SCLEROSIS,
            "multiplesclerosis": cls.MULTIPLE_SCLEROSIS,
            "sle": cls.LUPUS,
            "lupus": cls.LUPUS,
            "sjogren": cls.SJOGRENS_SYNDROME,
            "sjogrens": cls.SJOGRENS_SYNDROME,
            "sjogrenssyndrome": cls.SJOGRENS_SYNDROME,
            "sjögren": cls.SJOGRENS_SYNDROME,
            "sjögrens_syndrome": cls.SJOGRENS_SYNDROME,
            "thyroid": cls.AUTOIMMUNE_THYROID,
            "autoimmunethyroid": cls.AUTOIMMUNE_THYROID,
        }
        
        if name_lower in mapping:
            return mapping[name_lower]
        
        try:
            return cls(name_lower)
        except ValueError:
            raise UnknownDiseaseError(
                f"Unknown disease: {name}. Valid: {[d.value for d in cls]}"
            )


class AnalysisStatus(str, Enum):
    """Whether a derived result was computed from enough data."""
    OK = "ok"
    INSUFFICIENT_DATA = "insufficient_data"
