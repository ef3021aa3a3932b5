# __init__.py
from swipematch.models.like import Like
from swipematch.models.match import Match
from swipematch.models.user import User

__all__ = [
	"Like",
	"Match",
	"User",
]
