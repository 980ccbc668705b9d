"""
Circle membership and authorization logic.

Answers "may this user act on this circle?" and drives the invitation
workflow: invite (pending row keyed by e-mail), backfill the user id when the
invitee registers, confirm, and leave or remove.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from circles.db.models import now_utc
from circles.db.repositories import circles as circle_repo
from circles.db.repositories import users as user_repo
from circles.db.schemas import CircleMemberOut, CircleMembership
from circles.services._guards import storage_guard
from circles.services.notification_service import NotificationService
from circles.utils.config import AppConfig, get_config
from circles.utils.errors import Conflict, Internal, NotFound, Unauthorized, ValidationFailed

logger = logging.getLogger(__name__)

QUOTA_MESSAGE = "You reached the free account limit."


@dataclass(frozen=True)
class NotAMember:
    pass


@dataclass(frozen=True)
class MemberNotAdmin:
    membership: CircleMembership


@dataclass(frozen=True)
class Admin:
    membership: CircleMembership


AdminCheck = Union[NotAMember, MemberNotAdmin, Admin]


class CircleService:
    def __init__(self, db: Session, config: Optional[AppConfig] = None,
                 notifications: Optional[NotificationService] = None,
                 member_circles: Optional[List[int]] = None):
        self.db = db
        self.config = config or get_config()
        self._notifications = notifications
        # Confirmed circle ids already resolved for the caller of this request.
        self.member_circles = member_circles

    @property
    def notifications(self) -> NotificationService:
        if self._notifications is None:
            self._notifications = NotificationService(config=self.config)
        return self._notifications

    # === Membership queries ===

    def _memberships(self, user_id: int) -> List[CircleMembership]:
        with storage_guard(self.db, "circles_for_user"):
            rows = circle_repo.get_memberships_for_user(self.db, user_id)
        return [
            CircleMembership(
                circle_id=circle.id,
                name=circle.name,
                is_owner=circle.created_by == user_id,
                is_admin=member.admin_since is not None,
                joined_on=member.joined_on,
            )
            for circle, member in rows
        ]

    def circles_for_user(self, user_id: int) -> List[CircleMembership]:
        """Active memberships, confirmed or pending; raises NotFound when there are none."""
        memberships = self._memberships(user_id)
        if not memberships:
            raise NotFound("User has no circles.")
        return memberships

    def check_admin(self, user_id: int, circle_id: int) -> AdminCheck:
        for membership in self._memberships(user_id):
            if membership.circle_id != circle_id:
                continue
            if membership.is_admin:
                return Admin(membership)
            return MemberNotAdmin(membership)
        return NotAMember()

    def require_admin_of(self, user_id: int, circle_id: int) -> CircleMembership:
        # Callers cannot tell a stranger from a non-admin member.
        result = self.check_admin(user_id, circle_id)
        if isinstance(result, Admin):
            return result.membership
        raise Unauthorized()

    def require_member_of(self, user_id: int, circle_id: int) -> None:
        confirmed = self.member_circles
        if confirmed is None:
            with storage_guard(self.db, "require_member_of"):
                confirmed = circle_repo.get_confirmed_circle_ids(self.db, user_id)
        if circle_id not in confirmed:
            raise Unauthorized()

    def list_members(self, circle_id: int) -> List[CircleMemberOut]:
        with storage_guard(self.db, "list_members"):
            rows = circle_repo.get_members(self.db, circle_id)
        return [
            CircleMemberOut(
                user_id=member.user_id,
                email=member.email,
                name=user.full_name if user is not None else None,
                photo_url=user.photo_url if user is not None else None,
                is_owner=member.user_id is not None and member.user_id == circle.created_by,
                is_admin=member.admin_since is not None,
                joined_on=member.joined_on,
            )
            for member, user, circle in rows
        ]

    # === Circle lifecycle ===

    def create_circle(self, owner_id: int, owner_email: str, name: str) -> int:
        with storage_guard(self.db, "create_circle"):
            circle_repo.lock_owner(self.db, owner_id)
            owned = circle_repo.count_active_owned_circles(self.db, owner_id)
            if owned >= self.config.free_tier_circle_limit:
                self.db.rollback()
                raise ValidationFailed(QUOTA_MESSAGE)
            circle_id = circle_repo.create_circle_with_owner(self.db, name, owner_id, owner_email, now_utc())
        logger.info("circle_created: circle_id=%s owner_id=%s", circle_id, owner_id)
        return circle_id

    def deactivate_circle(self, acting_user_id: int, circle_id: int) -> bool:
        self._require_owner(acting_user_id, circle_id)
        with storage_guard(self.db, "deactivate_circle"):
            changed = circle_repo.deactivate_circle(self.db, circle_id)
        logger.info("circle_deactivated: circle_id=%s by=%s", circle_id, acting_user_id)
        return changed

    def _require_owner(self, user_id: int, circle_id: int):
        with storage_guard(self.db, "require_owner"):
            circle = circle_repo.get_active_circle(self.db, circle_id)
        if circle is None or circle.created_by != user_id:
            raise Unauthorized()
        return circle

    # === Invitation workflow ===

    def invite_member(self, acting_user_id: int, invitee_user_id: Optional[int], invitee_email: str,
                      circle_id: int, base_url: str) -> int:
        """Create a pending membership and e-mail the invitee.

        A failed send raises Internal; the pending row stays in place.
        """
        membership = self.require_admin_of(acting_user_id, circle_id)

        with storage_guard(self.db, "invite_member"):
            if circle_repo.get_active_membership_by_email(self.db, circle_id, invitee_email) is not None:
                raise Conflict("User already invited to this circle.")
            if invitee_user_id is not None and circle_repo.get_active_membership(
                    self.db, circle_id, invitee_user_id) is not None:
                raise Conflict("User already invited to this circle.")
            member_id = circle_repo.add_member(self.db, circle_id, acting_user_id, invitee_user_id, invitee_email)
            inviter = user_repo.get_user_by_id(self.db, acting_user_id)

        logger.info("circle_invitation: circle_id=%s member_id=%s", circle_id, member_id)
        result = self.notifications.notify_circle_invitation(
            invitee_email=invitee_email,
            circle_name=membership.name,
            inviter_name=inviter.full_name if inviter is not None else None,
            base_url=base_url,
        )
        if not result.get('success'):
            raise Internal()
        return member_id

    def backfill_invitee_on_registration(self, email: str, new_user_id: int) -> bool:
        with storage_guard(self.db, "backfill_invitee"):
            return circle_repo.backfill_invitee(self.db, email, new_user_id)

    def confirm_membership(self, user_id: int, circle_id: int) -> bool:
        """Accept a pending invitation; repeating the call is a no-op returning False."""
        with storage_guard(self.db, "confirm_membership"):
            if circle_repo.get_active_membership(self.db, circle_id, user_id) is None:
                raise Unauthorized()
            return circle_repo.confirm_member(self.db, user_id, circle_id)

    def remove_membership(self, user_id: int, circle_id: int, removed_by: Optional[int] = None) -> bool:
        """Leave a circle, or remove another member when ``removed_by`` is an admin."""
        if removed_by is not None and removed_by != user_id:
            self.require_admin_of(removed_by, circle_id)

        with storage_guard(self.db, "remove_membership"):
            circle = circle_repo.get_circle(self.db, circle_id)
            if circle is not None and circle.created_by == user_id:
                raise Conflict("The owner cannot leave the circle.")
            changed = circle_repo.remove_member(self.db, user_id, circle_id)
        if changed:
            logger.info("circle_member_removed: circle_id=%s user_id=%s by=%s",
                        circle_id, user_id, removed_by or user_id)
        return changed

    def set_admin(self, acting_user_id: int, circle_id: int, user_id: int, admin: bool) -> bool:
        circle = self._require_owner(acting_user_id, circle_id)
        if user_id == circle.created_by and not admin:
            raise Conflict("The owner is always an admin.")

        with storage_guard(self.db, "set_admin"):
            member = circle_repo.get_active_membership(self.db, circle_id, user_id)
            if member is None or member.joined_on is None:
                raise NotFound("Member not found.")
            return circle_repo.set_member_admin(self.db, circle_id, user_id, admin)
