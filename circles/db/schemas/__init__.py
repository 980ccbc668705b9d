"""
Request and response schemas, one module per resource.

Request models validate with the exact human-readable messages that end up
in the transport envelope; response models serialize to camelCase through
``CamelModel.to_wire``.
"""

from .base import CamelModel, CircleScoped
from .users import (
    EmailOnly,
    LocalLogin,
    GoogleLogin,
    UserCreate,
    ResetPassword,
    ChangePassword,
    ProfileUpdate,
    UserOut,
    LoginResult,
)
from .circles import (
    CircleCreate,
    CircleRef,
    InviteMember,
    RemoveMember,
    SetAdmin,
    CircleMembership,
    CircleMemberOut,
)
from .plugins import PluginAttach, PluginOut
from .todos import TodoAdd, TodoRef, TodoUpdate, TodoOut
from .shopping import (
    ShoppingItemAdd,
    ShoppingItemRef,
    ShoppingItemUpdate,
    ShoppingItemPurchase,
    ShoppingItemOut,
)
from .polls import (
    PollAdd,
    PollEdit,
    PollRef,
    AnswerAdd,
    AnswerEdit,
    AnswerRef,
    VoteAdd,
    PollOut,
    AnswerOut,
    VoteOut,
)
from .events import (
    EventAdd,
    EventUpdate,
    EventRef,
    EventMemberRef,
    EventPhotoRef,
    EventOut,
    EventMemberOut,
    EventPhotoOut,
)
from .expenses import (
    BillAdd,
    BillRemove,
    BudgetAdd,
    BudgetRemove,
    BillCategoryOut,
    BillOut,
    BudgetOut,
)
from .tracking import PositionSet, PositionOut

__all__ = [
    "CamelModel", "CircleScoped",
    "EmailOnly", "LocalLogin", "GoogleLogin", "UserCreate", "ResetPassword",
    "ChangePassword", "ProfileUpdate", "UserOut", "LoginResult",
    "CircleCreate", "CircleRef", "InviteMember", "RemoveMember", "SetAdmin",
    "CircleMembership", "CircleMemberOut",
    "PluginAttach", "PluginOut",
    "TodoAdd", "TodoRef", "TodoUpdate", "TodoOut",
    "ShoppingItemAdd", "ShoppingItemRef", "ShoppingItemUpdate", "ShoppingItemPurchase", "ShoppingItemOut",
    "PollAdd", "PollEdit", "PollRef", "AnswerAdd", "AnswerEdit", "AnswerRef", "VoteAdd",
    "PollOut", "AnswerOut", "VoteOut",
    "EventAdd", "EventUpdate", "EventRef", "EventMemberRef", "EventPhotoRef",
    "EventOut", "EventMemberOut", "EventPhotoOut",
    "BillAdd", "BillRemove", "BudgetAdd", "BudgetRemove", "BillCategoryOut", "BillOut", "BudgetOut",
    "PositionSet", "PositionOut",
]
