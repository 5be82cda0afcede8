"""Request/response schemas for sign-up, sign-in and the authenticated caller."""

from pydantic import BaseModel, Field

from app.core.security import EMAIL_MAX_LEN, PASSWORD_MAX_LEN, PASSWORD_MIN_LEN


class SignupRequest(BaseModel):
    """New member registration; access_token is the shared invite secret."""

    email: str = Field(..., min_length=3, max_length=EMAIL_MAX_LEN, description="Email address")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )
    first_name: str = Field(default="", max_length=255)
    last_name: str = Field(default="", max_length=255)
    access_token: str = Field(..., description="Organisation invite token")


class LoginRequest(BaseModel):
    """Credentials for login plus the shared invite secret."""

    email: str = Field(..., min_length=3, max_length=EMAIL_MAX_LEN, description="Email address")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")
    access_token: str = Field(..., description="Organisation invite token")


class PasswordResetRequest(BaseModel):
    """Request a password reset link for an email address."""

    email: str = Field(..., min_length=3, max_length=EMAIL_MAX_LEN)


class TokenResponse(BaseModel):
    """Identity token returned after sign-up or sign-in."""

    access_token: str = Field(..., description="JWT identity token")
    token_type: str = Field(default="bearer", description="Token type")
    uid: str = Field(..., description="Identity id")
    role: str = Field(..., description="Role resolved from the Role Store at sign-in")


class AcceptedResponse(BaseModel):
    """Acknowledgement for requests processed out of band."""

    status: str = "accepted"


class CallerIdentity(BaseModel):
    """Authenticated caller (identity id and email). Carries no role; roles are read from the Role Store."""

    uid: str
    email: str
