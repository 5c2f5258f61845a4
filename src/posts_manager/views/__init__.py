"""
Views Module

View-state components: post list, detail viewer, forms, delete
confirmation and transient notifications.
"""

from .confirmation import ConfirmationState, DeleteConfirmation
from .detail import DetailState, DetailView, DetailViewer
from .forms import CreatePostForm, UpdatePostForm, validate_post_fields
from .notifications import TransientNotification
from .post_list import PostListManager, PostListView

__all__ = [
    "ConfirmationState",
    "DeleteConfirmation",
    "DetailState",
    "DetailView",
    "DetailViewer",
    "CreatePostForm",
    "UpdatePostForm",
    "validate_post_fields",
    "TransientNotification",
    "PostListManager",
    "PostListView",
]
