# __init__.py
from swipematch.schemas.match import LikeRequest, LikeResponse, MatchedProfile
from swipematch.schemas.media import AvatarUploadResponse, PhotoDeleteResponse, PhotoUploadResponse, ReelUploadResponse
from swipematch.schemas.user import (
	AgeRange,
	Lifestyle,
	Preferences,
	Prompt,
	PublicProfile,
	Reel,
	Token,
	TokenData,
	UserCreate,
	UserLogin,
	UserRead,
	UserUpdate,
)

__all__ = [
	"LikeRequest",
	"LikeResponse",
	"MatchedProfile",
	"AvatarUploadResponse",
	"PhotoDeleteResponse",
	"PhotoUploadResponse",
	"ReelUploadResponse",
	"AgeRange",
	"Lifestyle",
	"Preferences",
	"Prompt",
	"PublicProfile",
	"Reel",
	"Token",
	"TokenData",
	"UserCreate",
	"UserLogin",
	"UserRead",
	"UserUpdate",
]
