"""Database tables and their JSON representations."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    declared_attr,
    mapped_column,
    relationship,
)


class Base(DeclarativeBase):
    """Declarative base shared by all tables."""


def _json_time(value: Optional[datetime]) -> Optional[str]:
    """Format a timestamp as ISO 8601; naive values are taken as local time."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.astimezone()
    return value.isoformat()


class Teacher(Base):
    __tablename__ = "teacher"

    id: Mapped[int] = mapped_column("teacherid", Integer, primary_key=True)
    birth_date: Mapped[Optional[datetime]] = mapped_column(
        "birth_date", DateTime, nullable=True
    )
    email: Mapped[Optional[str]] = mapped_column("email", String(255), default="")
    google_id: Mapped[Optional[str]] = mapped_column(
        "google_id", String(255), default=""
    )
    name: Mapped[Optional[str]] = mapped_column("name", String(255), default="")
    password: Mapped[Optional[str]] = mapped_column(
        "password", String(255), default=""
    )
    surname: Mapped[Optional[str]] = mapped_column("surname", String(255), default="")

    def to_dict(self) -> dict[str, Any]:
        """JSON form; the password is never included."""
        data: dict[str, Any] = {"teacherId": self.id or 0}
        if self.birth_date is not None:
            data["birthDate"] = _json_time(self.birth_date)
        data["email"] = self.email or ""
        if self.google_id:
            data["googleId"] = self.google_id
        data["name"] = self.name or ""
        data["surname"] = self.surname or ""
        return data


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column("id", Integer, primary_key=True)
    name: Mapped[str] = mapped_column("name", String(255), unique=True, nullable=False)

    def to_dict(self) -> dict[str, Any]:
        """JSON form of the category."""
        return {"id": self.id or 0, "name": self.name or ""}


def _teacher_dict(teacher: Optional[Teacher]) -> dict[str, Any]:
    return (teacher if teacher is not None else Teacher()).to_dict()


def _category_dict(category: Optional[Category]) -> dict[str, Any]:
    return (category if category is not None else Category()).to_dict()


class _ActivityColumns:
    """Columns shared by projects, workshops and competitions."""

    teacher_id: Mapped[Optional[int]] = mapped_column(
        "teacherId", ForeignKey("teacher.teacherid"), nullable=True
    )
    category_id: Mapped[Optional[int]] = mapped_column(
        "categoryId", ForeignKey("categories.id"), nullable=True
    )
    description: Mapped[Optional[str]] = mapped_column("aciklama", Text, default="")
    slogan: Mapped[Optional[str]] = mapped_column("slogan", String(255), default="")
    subject_tag: Mapped[Optional[str]] = mapped_column(
        "konuEtiketi", String(255), default=""
    )
    start_date: Mapped[Optional[datetime]] = mapped_column(
        "baslangicTarihi", DateTime, nullable=True
    )
    end_date: Mapped[Optional[datetime]] = mapped_column(
        "bitisTarihi", DateTime, nullable=True
    )
    education_type: Mapped[Optional[str]] = mapped_column(
        "egitimTuru", String(255), default=""
    )
    participant_level: Mapped[Optional[str]] = mapped_column(
        "katilimciDuzeyi", String(255), default=""
    )
    quota_info: Mapped[Optional[str]] = mapped_column(
        "kontenjanBilgisi", String(255), default=""
    )
    participation_condition: Mapped[Optional[str]] = mapped_column(
        "katilimKosulu", String(255), default=""
    )
    fee: Mapped[Optional[str]] = mapped_column("egitimUcreti", String(255), default="")
    contact_permission: Mapped[Optional[str]] = mapped_column(
        "iletisimOnay", String(255), default=""
    )
    photo_permission: Mapped[Optional[str]] = mapped_column(
        "fotoOnay", String(255), default=""
    )

    @declared_attr
    def teacher(cls) -> Mapped[Optional[Teacher]]:
        return relationship(Teacher)

    @declared_attr
    def category(cls) -> Mapped[Optional[Category]]:
        return relationship(Category)


class Project(_ActivityColumns, Base):
    __tablename__ = "project"

    id: Mapped[int] = mapped_column("projectId", Integer, primary_key=True)
    project_name: Mapped[Optional[str]] = mapped_column(
        "projeAdi", String(255), default=""
    )
    text: Mapped[Optional[str]] = mapped_column("text", Text, default="")

    def to_dict(self) -> dict[str, Any]:
        """JSON form with the owning teacher and category nested."""
        return {
            "projectId": self.id or 0,
            "teacherId": self.teacher_id or 0,
            "categoryId": self.category_id or 0,
            "projeAdi": self.project_name or "",
            "aciklama": self.description or "",
            "text": self.text or "",
            "slogan": self.slogan or "",
            "konuEtiketi": self.subject_tag or "",
            "baslangicTarihi": _json_time(self.start_date),
            "bitisTarihi": _json_time(self.end_date),
            "egitimTuru": self.education_type or "",
            "katilimciDuzeyi": self.participant_level or "",
            "kontenjanBilgisi": self.quota_info or "",
            "katilimKosulu": self.participation_condition or "",
            "egitimUcreti": self.fee or "",
            "iletisimOnay": self.contact_permission or "",
            "fotoOnay": self.photo_permission or "",
            "teacher": _teacher_dict(self.teacher),
            "category": _category_dict(self.category),
        }


class Atolye(_ActivityColumns, Base):
    __tablename__ = "atolye"

    id: Mapped[int] = mapped_column("atolyeId", Integer, primary_key=True)
    workshop_name: Mapped[Optional[str]] = mapped_column(
        "projeAdi", String(255), default=""
    )
    text: Mapped[Optional[str]] = mapped_column("text", Text, default="")

    def to_dict(self) -> dict[str, Any]:
        """JSON form; workshop keys carry the field names, not column names."""
        return {
            "ID": self.id or 0,
            "TeacherID": self.teacher_id or 0,
            "CategoryID": self.category_id or 0,
            "WorkshopName": self.workshop_name or "",
            "Description": self.description or "",
            "Text": self.text or "",
            "Slogan": self.slogan or "",
            "SubjectTag": self.subject_tag or "",
            "StartDate": _json_time(self.start_date),
            "EndDate": _json_time(self.end_date),
            "EducationType": self.education_type or "",
            "ParticipantLevel": self.participant_level or "",
            "QuotaInfo": self.quota_info or "",
            "ParticipationCondition": self.participation_condition or "",
            "Fee": self.fee or "",
            "ContactPermission": self.contact_permission or "",
            "PhotoPermission": self.photo_permission or "",
            "Teacher": _teacher_dict(self.teacher),
            "Category": _category_dict(self.category),
        }


class Yarisma(_ActivityColumns, Base):
    __tablename__ = "yarisma"

    id: Mapped[int] = mapped_column("yarismaId", Integer, primary_key=True)
    competition_name: Mapped[Optional[str]] = mapped_column(
        "atolyeAdi", String(255), default=""
    )
    text: Mapped[Optional[str]] = mapped_column("baslik", Text, default="")
    amount: Mapped[Optional[str]] = mapped_column("tutar", String(255), default="")

    def to_dict(self) -> dict[str, Any]:
        """JSON form with the owning teacher and category nested."""
        return {
            "yarismaId": self.id or 0,
            "teacherId": self.teacher_id or 0,
            "categoryId": self.category_id or 0,
            "atolyeAdi": self.competition_name or "",
            "aciklama": self.description or "",
            "baslik": self.text or "",
            "slogan": self.slogan or "",
            "konuEtiketi": self.subject_tag or "",
            "baslangicTarihi": _json_time(self.start_date),
            "bitisTarihi": _json_time(self.end_date),
            "egitimTuru": self.education_type or "",
            "katilimciDuzeyi": self.participant_level or "",
            "kontenjanBilgisi": self.quota_info or "",
            "katilimKosulu": self.participation_condition or "",
            "egitimUcreti": self.fee or "",
            "tutar": self.amount or "",
            "iletisimOnay": self.contact_permission or "",
            "fotoOnay": self.photo_permission or "",
            "teacher": _teacher_dict(self.teacher),
            "category": _category_dict(self.category),
        }


class ProjectParticipant(Base):
    __tablename__ = "project_participants"
    __table_args__ = (
        UniqueConstraint("projectId", "teacherId", name="idx_teacher_project"),
    )

    id: Mapped[int] = mapped_column("id", Integer, primary_key=True)
    project_id: Mapped[int] = mapped_column(
        "projectId", ForeignKey("project.projectId"), nullable=False
    )
    teacher_id: Mapped[int] = mapped_column(
        "teacherId", ForeignKey("teacher.teacherid"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        "created_at", DateTime, default=datetime.now
    )

    project: Mapped[Optional[Project]] = relationship(Project)
    teacher: Mapped[Optional[Teacher]] = relationship(Teacher)

    def to_dict(self) -> dict[str, Any]:
        """JSON form with the project and teacher nested."""
        return {
            "id": self.id or 0,
            "projectId": self.project_id or 0,
            "teacherId": self.teacher_id or 0,
            "createdAt": _json_time(self.created_at),
            "project": (self.project if self.project is not None else Project()).to_dict(),
            "teacher": _teacher_dict(self.teacher),
        }


class AtolyeParticipant(Base):
    __tablename__ = "atolye_participants"
    __table_args__ = (
        UniqueConstraint("atolyeId", "teacherId", name="idx_teacher_atolye"),
    )

    id: Mapped[int] = mapped_column("id", Integer, primary_key=True)
    atolye_id: Mapped[int] = mapped_column(
        "atolyeId", ForeignKey("atolye.atolyeId"), nullable=False
    )
    teacher_id: Mapped[int] = mapped_column(
        "teacherId", ForeignKey("teacher.teacherid"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        "created_at", DateTime, default=datetime.now
    )

    atolye: Mapped[Optional[Atolye]] = relationship(Atolye)
    teacher: Mapped[Optional[Teacher]] = relationship(Teacher)

    def to_dict(self) -> dict[str, Any]:
        """JSON form with the workshop and teacher nested."""
        return {
            "id": self.id or 0,
            "atolyeId": self.atolye_id or 0,
            "teacherId": self.teacher_id or 0,
            "createdAt": _json_time(self.created_at),
            "atolye": (self.atolye if self.atolye is not None else Atolye()).to_dict(),
            "teacher": _teacher_dict(self.teacher),
        }


class YarismaParticipant(Base):
    __tablename__ = "yarisma_participants"
    __table_args__ = (
        UniqueConstraint("yarismaId", "teacherId", name="idx_teacher_yarisma"),
    )

    id: Mapped[int] = mapped_column("id", Integer, primary_key=True)
    yarisma_id: Mapped[int] = mapped_column(
        "yarismaId", ForeignKey("yarisma.yarismaId"), nullable=False
    )
    teacher_id: Mapped[int] = mapped_column(
        "teacherId", ForeignKey("teacher.teacherid"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        "created_at", DateTime, default=datetime.now
    )

    yarisma: Mapped[Optional[Yarisma]] = relationship(Yarisma)
    teacher: Mapped[Optional[Teacher]] = relationship(Teacher)

    def to_dict(self) -> dict[str, Any]:
        """JSON form with the competition and teacher nested."""
        return {
            "id": self.id or 0,
            "yarismaId": self.yarisma_id or 0,
            "teacherId": self.teacher_id or 0,
            "createdAt": _json_time(self.created_at),
            "yarisma": (self.yarisma if self.yarisma is not None else Yarisma()).to_dict(),
            "teacher": _teacher_dict(self.teacher),
        }