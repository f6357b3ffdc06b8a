from .evidence import CorrectionRequest, EvidenceRead, EvidenceSubmission  # noqa: F401
