from .requests import SuperAdminSignupRequest, SignInRequest, SchoolSignInRequest, SchoolSignupRequest
from .responses import TokenResponse, MessageResponse, MeResponse
