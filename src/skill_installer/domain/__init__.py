from .skill import Skill, SkillHeader, Probe, ProbeStatus
from .types import WriteStatus, WriteResult, WritePolicy, InstallRequest, InstallReport

__all__ = [
    "Skill",
    "SkillHeader",
    "Probe",
    "ProbeStatus",
    "WriteStatus",
    "WriteResult",
    "WritePolicy",
    "InstallRequest",
    "InstallReport",
]
