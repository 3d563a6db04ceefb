from creatorhub.models.user_model import User
from creatorhub.models.profile_model import Profile
from creatorhub.models.post_model import Post
from creatorhub.models.media_model import Media
from creatorhub.models.subscription_model import Subscription
from creatorhub.models.follow_model import Follow
from creatorhub.models.vote_model import Vote
from creatorhub.models.comment_model import Comment

__all__ = [
    "User",
    "Profile",
    "Post",
    "Media",
    "Subscription",
    "Follow",
    "Vote",
    "Comment",
]
