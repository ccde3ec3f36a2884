"""Match model: two users paired against one study request."""
import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studymatch.models.base import Base


class MatchStatus(str, enum.Enum):
    # PENDING is never produced by the accept flow; accepted matches start CONFIRMED.
    PENDING = "pending"
    CONFIRMED = "confirmed"


class Match(Base):
    __tablename__ = "matches"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    request_id: Mapped[int] = mapped_column(
        ForeignKey("study_requests.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # user_id_1 is the requester, user_id_2 the user who accepted
    user_id_1: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id_2: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status: Mapped[MatchStatus] = mapped_column(
        Enum(MatchStatus), nullable=False, default=MatchStatus.PENDING, index=True
    )
    initiated_by: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    request = relationship("StudyRequest")
    user1 = relationship("User", foreign_keys=[user_id_1])
    user2 = relationship("User", foreign_keys=[user_id_2])

    def has_participant(self, user_id: int) -> bool:
        return user_id in (self.user_id_1, self.user_id_2)

    def partner_of(self, user_id: int) -> int:
        return self.user_id_2 if user_id == self.user_id_1 else self.user_id_1
