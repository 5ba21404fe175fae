"""Application services implementing the report lifecycle."""

from fixwatch.application.services.dashboard_service import (
    DashboardService,
    ReportView,
)
from fixwatch.application.services.golden_key_authority_service import (
    GoldenKeyAuthorityService,
)
from fixwatch.application.services.report_lifecycle_service import (
    ReportLifecycleService,
)
from fixwatch.application.services.report_submission_service import (
    ReportSubmissionService,
)
from fixwatch.application.services.secret_codec_service import Blake3SecretCodec
from fixwatch.application.services.threshold_judge_service import (
    ThresholdJudgeService,
)

__all__: list[str] = [
    "Blake3SecretCodec",
    "DashboardService",
    "GoldenKeyAuthorityService",
    "ReportLifecycleService",
    "ReportSubmissionService",
    "ReportView",
    "ThresholdJudgeService",
]
