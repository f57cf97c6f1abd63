# schoolhub/schemas/__init__.py

# Import enums
from .enums import UserRole, SchoolStatus, SubscriptionTier

# Import common schemas
from .common.error import ErrorResponse

# Import auth schemas
from .auth.requests import (
    SuperAdminSignupRequest,
    SignInRequest,
    SchoolSignInRequest,
    SchoolSignupRequest
)
from .auth.responses import TokenResponse, MessageResponse, MeResponse

# Import user schemas
from .user import SystemUserRecord, UserRecord, PrincipalResponse

# Import school schemas
from .school import (
    SchoolRecord,
    SchoolCreateRequest,
    SchoolResponse,
    SchoolDetailResponse,
    SchoolCreatedResponse,
    SchoolListResponse
)

# Import academic schemas
from .academics import (
    ClassRecord,
    SubjectRecord,
    ExaminationRecord,
    ResultRecord,
    ClassCreateRequest,
    SubjectCreateRequest,
    ExaminationCreateRequest,
    ExaminationUpdateRequest,
    ResultCreateRequest,
    ClassResponse,
    SubjectResponse,
    ExaminationResponse,
    ResultResponse
)
