"""Business operations on projects, workshops, competitions and categories."""

from __future__ import annotations

from typing import Sequence, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from atolyehub.models import (
    Atolye,
    AtolyeParticipant,
    Category,
    Project,
    ProjectParticipant,
    Yarisma,
    YarismaParticipant,
)

_T = TypeVar("_T")

_ACTIVITY_RELATIONS = ("teacher", "category")


class NotFoundError(LookupError):
    """Raised when a requested record does not exist."""


class ParticipationError(ValueError):
    """Raised when a teacher cannot join an activity."""


def _load(session: Session, model: type[_T], ident: int, relations: Sequence[str]) -> _T | None:
    stmt = (
        select(model)
        .options(*(selectinload(getattr(model, name)) for name in relations))
        .where(model.id == ident)  # type: ignore[attr-defined]
        .execution_options(populate_existing=True)
    )
    return session.scalars(stmt).first()


def _load_all(session: Session, model: type[_T]) -> list[_T]:
    stmt = select(model).options(
        *(selectinload(getattr(model, name)) for name in _ACTIVITY_RELATIONS)
    )
    return list(session.scalars(stmt).all())


def _get(session: Session, model: type[_T], ident: int, label: str) -> _T:
    found = _load(session, model, ident, _ACTIVITY_RELATIONS)
    if found is None:
        raise NotFoundError(f"{label} bulunamadı")
    return found


def _save(session: Session, obj: object) -> None:
    session.add(obj)
    try:
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise


def _participate(
    session: Session,
    model: type,
    activity_id: int,
    label: str,
    participant: object,
    relation: str,
    duplicate_message: str,
):
    try:
        _get(session, model, activity_id, label)
    except NotFoundError:
        raise ParticipationError(f"{label} bulunamadı") from None
    try:
        _save(session, participant)
    except SQLAlchemyError:
        raise ParticipationError(duplicate_message) from None
    participant_model = type(participant)
    details = _load(session, participant_model, participant.id, ("teacher", relation))  # type: ignore[attr-defined]
    return details if details is not None else participant


def create_project(session: Session, project: Project) -> Project:
    """Store a new project and return it with teacher and category loaded."""
    _save(session, project)
    return get_project_by_id(session, project.id)


def get_all_projects(session: Session) -> list[Project]:
    """Return every project with teacher and category loaded."""
    return _load_all(session, Project)


def get_project_by_id(session: Session, project_id: int) -> Project:
    """Return one project; raises NotFoundError when it does not exist."""
    return _get(session, Project, project_id, "proje")


def participate_in_project(
    session: Session, project_id: int, teacher_id: int
) -> ProjectParticipant:
    """Record that a teacher joins a project."""
    return _participate(
        session,
        Project,
        project_id,
        "proje",
        ProjectParticipant(project_id=project_id, teacher_id=teacher_id),
        "project",
        "bu projeye zaten katıldınız veya bir hata oluştu",
    )


def create_atolye(session: Session, atolye: Atolye) -> Atolye:
    """Store a new workshop and return it with teacher and category loaded."""
    _save(session, atolye)
    return get_atolye_by_id(session, atolye.id)


def get_all_atolyeler(session: Session) -> list[Atolye]:
    """Return every workshop with teacher and category loaded."""
    return _load_all(session, Atolye)


def get_atolye_by_id(session: Session, atolye_id: int) -> Atolye:
    """Return one workshop; raises NotFoundError when it does not exist."""
    return _get(session, Atolye, atolye_id, "atölye")


def participate_in_atolye(
    session: Session, atolye_id: int, teacher_id: int
) -> AtolyeParticipant:
    """Record that a teacher joins a workshop."""
    return _participate(
        session,
        Atolye,
        atolye_id,
        "atölye",
        AtolyeParticipant(atolye_id=atolye_id, teacher_id=teacher_id),
        "atolye",
        "bu atölyeye zaten katıldınız veya bir hata oluştu",
    )


def create_yarisma(session: Session, yarisma: Yarisma) -> Yarisma:
    """Store a new competition and return it with teacher and category loaded."""
    _save(session, yarisma)
    return get_yarisma_by_id(session, yarisma.id)


def get_all_yarismalar(session: Session) -> list[Yarisma]:
    """Return every competition with teacher and category loaded."""
    return _load_all(session, Yarisma)


def get_yarisma_by_id(session: Session, yarisma_id: int) -> Yarisma:
    """Return one competition; raises NotFoundError when it does not exist."""
    return _get(session, Yarisma, yarisma_id, "yarışma")


def participate_in_yarisma(
    session: Session, yarisma_id: int, teacher_id: int
) -> YarismaParticipant:
    """Record that a teacher joins a competition."""
    return _participate(
        session,
        Yarisma,
        yarisma_id,
        "yarışma",
        YarismaParticipant(yarisma_id=yarisma_id, teacher_id=teacher_id),
        "yarisma",
        "bu yarışmaya zaten katıldınız veya bir hata oluştu",
    )


def get_all_categories(session: Session) -> list[Category]:
    """Return every activity category."""
    return list(session.scalars(select(Category)).all())