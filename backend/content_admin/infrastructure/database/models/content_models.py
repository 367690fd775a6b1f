"""SQLAlchemy ORM models for the content resources managed by the admin API."""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Float, Index, Integer, SmallInteger, String, Text
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from content_admin.infrastructure.database.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ContentTableMixin:
    """Columns shared by every content table: lifecycle status and soft delete."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="DRAFT")
    is_deleted: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    create_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    update_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    @declared_attr.directive
    def __table_args__(cls) -> tuple:
        return (Index(f"ix_{cls.__tablename__}_status_deleted", "status", "is_deleted"),)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, name='{self.name}', status={self.status})>"


class ExerciseModel(ContentTableMixin, Base):
    __tablename__ = "exercise"

    cover_img_url: Mapped[str | None] = mapped_column(String(512))
    met: Mapped[float | None] = mapped_column(Float)
    structure_type_code: Mapped[str | None] = mapped_column(String(50))
    gender_code: Mapped[str | None] = mapped_column(String(50))
    difficulty_code: Mapped[str | None] = mapped_column(String(50))
    equipment_code: Mapped[str | None] = mapped_column(String(50))
    position_code: Mapped[str | None] = mapped_column(String(50))
    injured_codes: Mapped[list | None] = mapped_column(JSON)


class WorkoutModel(ContentTableMixin, Base):
    __tablename__ = "workout"

    description: Mapped[str | None] = mapped_column(Text)
    premium: Mapped[int | None] = mapped_column(SmallInteger, default=0)
    new_start_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    new_end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))


class SoundModel(ContentTableMixin, Base):
    __tablename__ = "sound"

    gender_code: Mapped[str | None] = mapped_column(String(50))
    usage_code: Mapped[str | None] = mapped_column(String(50))
    female_audio_url: Mapped[str | None] = mapped_column(String(512))
    female_audio_duration: Mapped[int | None] = mapped_column(Integer)
    male_audio_url: Mapped[str | None] = mapped_column(String(512))
    male_audio_duration: Mapped[int | None] = mapped_column(Integer)
    translation: Mapped[int | None] = mapped_column(SmallInteger)
    female_script: Mapped[str | None] = mapped_column(Text)
    male_script: Mapped[str | None] = mapped_column(Text)


class MusicModel(ContentTableMixin, Base):
    __tablename__ = "music"

    display_name: Mapped[str | None] = mapped_column(String(255))
    audio_url: Mapped[str | None] = mapped_column(String(512))
    audio_duration: Mapped[int | None] = mapped_column(Integer)


class PlaylistModel(ContentTableMixin, Base):
    __tablename__ = "playlist"

    type: Mapped[str | None] = mapped_column(String(50))
    premium: Mapped[int | None] = mapped_column(SmallInteger, default=0)


class TemplateModel(ContentTableMixin, Base):
    __tablename__ = "template"

    description: Mapped[str | None] = mapped_column(Text)
    duration_code: Mapped[str | None] = mapped_column(String(50))
    days: Mapped[int | None] = mapped_column(Integer)


class ProgramModel(ContentTableMixin, Base):
    __tablename__ = "program"

    cover_img_url: Mapped[str | None] = mapped_column(String(512))
    detail_img_url: Mapped[str | None] = mapped_column(String(512))
    description: Mapped[str | None] = mapped_column(Text)
    show_type_code: Mapped[str | None] = mapped_column(String(50))
    duration_week: Mapped[int | None] = mapped_column(Integer)


class CategoryModel(ContentTableMixin, Base):
    __tablename__ = "category"

    cover_img_url: Mapped[str | None] = mapped_column(String(512))
    description: Mapped[str | None] = mapped_column(Text)
    sort: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class UserModel(ContentTableMixin, Base):
    __tablename__ = "user"

    email: Mapped[str | None] = mapped_column(String(255), unique=True)
    avatar_url: Mapped[str | None] = mapped_column(String(512))
