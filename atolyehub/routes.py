"""HTTP endpoints for projects, workshops, competitions and categories."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field, fields
from datetime import datetime, timedelta, timezone
from functools import wraps
from typing import Any, Callable, Optional

from flask import Blueprint, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from atolyehub import services
from atolyehub.auth import AuthError, authenticate
from atolyehub.models import Atolye, Project, Yarisma

_UINT_MAX = 2**64 - 1
_ID_MAX = 2**32 - 1
_ID_PATTERN = re.compile(r"[0-9]+")
_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})"
)
_ZERO = {"str": "", "uint": 0, "time": None}


class RequestError(ValueError):
    """Raised when a request body cannot be bound to a request type."""


def parse_id(value: str) -> int:
    """Parse a path identifier: decimal digits only, at most 32 bits."""
    if not _ID_PATTERN.fullmatch(value):
        raise ValueError(f"invalid id: {value!r}")
    ident = int(value)
    if ident > _ID_MAX:
        raise ValueError(f"id out of range: {value!r}")
    return ident


def _parse_time(key: str, text: str) -> datetime:
    match = _RFC3339.fullmatch(text)
    if match is None:
        raise RequestError(f"{key}: expected an RFC 3339 timestamp")
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    micro = int(((match.group(7) or "") + "000000")[:6])
    zone = match.group(8)
    if zone == "Z":
        tz = timezone.utc
    else:
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        if hours > 23 or minutes > 59:
            raise RequestError(f"{key}: invalid time zone offset")
        offset = timedelta(hours=hours, minutes=minutes)
        tz = timezone(offset if zone[0] == "+" else -offset)
    try:
        return datetime(year, month, day, hour, minute, second, micro, tzinfo=tz)
    except ValueError as exc:
        raise RequestError(f"{key}: {exc}") from exc


def _convert(key: str, kind: str, value: Any) -> Any:
    if value is None:
        return _ZERO[kind]
    if kind == "str":
        if not isinstance(value, str):
            raise RequestError(f"{key}: expected a string")
        return value
    if kind == "uint":
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _UINT_MAX:
            raise RequestError(f"{key}: expected a non-negative integer")
        return value
    if not isinstance(value, str):
        raise RequestError(f"{key}: expected an RFC 3339 timestamp")
    return _parse_time(key, value)


def _text(key: str) -> Any:
    return field(default="", metadata={"json": key, "kind": "str"})


def _uint(key: str) -> Any:
    return field(default=0, metadata={"json": key, "kind": "uint"})


def _time(key: str) -> Any:
    return field(default=None, metadata={"json": key, "kind": "time"})


def _bind(cls: type, data: Any) -> Any:
    """Bind a decoded JSON object; keys match exactly or ignoring case."""
    if not isinstance(data, dict):
        raise RequestError("request body must be a JSON object")
    specs = {f.metadata["json"]: f for f in fields(cls)}
    folded = {key.casefold(): f for key, f in specs.items()}
    values: dict[str, Any] = {}
    for key, value in data.items():
        spec = specs.get(key) or folded.get(key.casefold())
        if spec is not None:
            values[spec.name] = _convert(key, spec.metadata["kind"], value)
    return cls(**values)


@dataclass
class CreateProjectRequest:
    """Body of a project creation request."""

    category_id: int = _uint("categoryId")
    project_name: str = _text("projeAdi")
    description: str = _text("aciklama")
    text: str = _text("text")
    slogan: str = _text("slogan")
    subject_tag: str = _text("konuEtiketi")
    start_date: Optional[datetime] = _time("baslangicTarihi")
    end_date: Optional[datetime] = _time("bitisTarihi")
    education_type: str = _text("egitimTuru")
    participant_level: str = _text("katilimciDuzeyi")
    quota_info: str = _text("kontenjanBilgisi")
    participation_condition: str = _text("katilimKosulu")
    fee: str = _text("egitimUcreti")
    contact_permission: str = _text("iletisimOnay")
    photo_permission: str = _text("fotoOnay")

    @classmethod
    def from_json(cls, data: Any) -> "CreateProjectRequest":
        """Bind a decoded JSON object to a project request."""
        return _bind(cls, data)


@dataclass
class CreateAtolyeRequest:
    """Body of a workshop creation request."""

    category_id: int = _uint("categoryId")
    workshop_name: str = _text("projeAdi")
    description: str = _text("aciklama")
    text: str = _text("text")
    slogan: str = _text("slogan")
    subject_tag: str = _text("konuEtiketi")
    start_date: Optional[datetime] = _time("baslangicTarihi")
    end_date: Optional[datetime] = _time("bitisTarihi")
    education_type: str = _text("egitimTuru")
    participant_level: str = _text("katilimciDuzeyi")
    quota_info: str = _text("kontenjanBilgisi")
    participation_condition: str = _text("katilimKosulu")
    fee: str = _text("egitimUcreti")
    contact_permission: str = _text("iletisimOnay")
    photo_permission: str = _text("fotoOnay")

    @classmethod
    def from_json(cls, data: Any) -> "CreateAtolyeRequest":
        """Bind a decoded JSON object to a workshop request."""
        return _bind(cls, data)


@dataclass
class CreateYarismaRequest:
    """Body of a competition creation request."""

    category_id: int = _uint("categoryId")
    competition_name: str = _text("atolyeAdi")
    description: str = _text("aciklama")
    text: str = _text("baslik")
    slogan: str = _text("slogan")
    subject_tag: str = _text("konuEtiketi")
    start_date: Optional[datetime] = _time("baslangicTarihi")
    end_date: Optional[datetime] = _time("bitisTarihi")
    education_type: str = _text("egitimTuru")
    participant_level: str = _text("katilimciDuzeyi")
    quota_info: str = _text("kontenjanBilgisi")
    participation_condition: str = _text("katilimKosulu")
    fee: str = _text("egitimUcreti")
    amount: str = _text("tutar")
    contact_permission: str = _text("iletisimOnay")
    photo_permission: str = _text("fotoOnay")

    @classmethod
    def from_json(cls, data: Any) -> "CreateYarismaRequest":
        """Bind a decoded JSON object to a competition request."""
        return _bind(cls, data)


def _local(value: Optional[datetime]) -> Optional[datetime]:
    """Store timestamps as naive local time."""
    if value is None:
        return None
    return value.astimezone().replace(tzinfo=None)


def _activity_fields(req: Any) -> dict[str, Any]:
    return {
        "category_id": req.category_id,
        "description": req.description,
        "text": req.text,
        "slogan": req.slogan,
        "subject_tag": req.subject_tag,
        "start_date": _local(req.start_date),
        "end_date": _local(req.end_date),
        "education_type": req.education_type,
        "participant_level": req.participant_level,
        "quota_info": req.quota_info,
        "participation_condition": req.participation_condition,
        "fee": req.fee,
        "contact_permission": req.contact_permission,
        "photo_permission": req.photo_permission,
    }


def _build_project(req: CreateProjectRequest, teacher_id: int) -> Project:
    return Project(teacher_id=teacher_id, project_name=req.project_name, **_activity_fields(req))


def _build_atolye(req: CreateAtolyeRequest, teacher_id: int) -> Atolye:
    return Atolye(teacher_id=teacher_id, workshop_name=req.workshop_name, **_activity_fields(req))


def _build_yarisma(req: CreateYarismaRequest, teacher_id: int) -> Yarisma:
    # Only these fields are taken over from a competition request.
    return Yarisma(
        teacher_id=teacher_id,
        category_id=req.category_id,
        competition_name=req.competition_name,
        description=req.description,
        text=req.text,
    )


@dataclass(frozen=True)
class _Activity:
    path: str
    request_type: type
    build: Callable[[Any, int], Any]
    create: Callable[..., Any]
    get_all: Callable[..., Any]
    get_one: Callable[..., Any]
    participate: Callable[..., Any]
    label: str
    plural: str
    id_label: str


_ACTIVITIES = (
    _Activity(
        "/projects", CreateProjectRequest, _build_project,
        services.create_project, services.get_all_projects,
        services.get_project_by_id, services.participate_in_project,
        "Proje", "Projeler", "proje",
    ),
    _Activity(
        "/workshops", CreateAtolyeRequest, _build_atolye,
        services.create_atolye, services.get_all_atolyeler,
        services.get_atolye_by_id, services.participate_in_atolye,
        "Atölye", "Atölyeler", "atölye",
    ),
    _Activity(
        "/competitions", CreateYarismaRequest, _build_yarisma,
        services.create_yarisma, services.get_all_yarismalar,
        services.get_yarisma_by_id, services.participate_in_yarisma,
        "Yarışma", "Yarışmalar", "yarışma",
    ),
)


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _read_body(request_type: type) -> Any:
    try:
        data = json.loads(request.get_data())
    except ValueError as exc:
        raise RequestError(str(exc)) from exc
    return request_type.from_json(data)


def _register(bp: Blueprint, activity: _Activity, public: Callable, protected: Callable) -> None:
    name = activity.path.strip("/")

    @public
    def list_all(session):
        try:
            items = activity.get_all(session)
        except SQLAlchemyError as exc:
            return _error(f"{activity.plural} getirilemedi: {exc}", 500)
        return jsonify([item.to_dict() for item in items])

    @public
    def get_one(session, raw_id):
        try:
            ident = parse_id(raw_id)
        except ValueError:
            return _error(f"Geçersiz {activity.id_label} ID", 400)
        try:
            item = activity.get_one(session, ident)
        except (services.NotFoundError, SQLAlchemyError):
            return _error(f"{activity.label} bulunamadı", 404)
        return jsonify(item.to_dict())

    @protected
    def create(session, teacher_id):
        try:
            req = _read_body(activity.request_type)
        except RequestError as exc:
            return _error(f"Geçersiz veya eksik veri: {exc}", 400)
        try:
            created = activity.create(session, activity.build(req, teacher_id))
        except (SQLAlchemyError, services.NotFoundError) as exc:
            return _error(f"{activity.label} oluşturulamadı: {exc}", 500)
        return jsonify(created.to_dict()), 201

    @protected
    def participate(session, teacher_id, raw_id):
        try:
            ident = parse_id(raw_id)
        except ValueError:
            return _error(f"Geçersiz {activity.id_label} ID", 400)
        try:
            joined = activity.participate(session, ident, teacher_id)
        except (services.ParticipationError, SQLAlchemyError) as exc:
            return _error(str(exc), 400)
        return jsonify(joined.to_dict()), 201

    bp.add_url_rule(activity.path, f"{name}_list", list_all, methods=["GET"])
    bp.add_url_rule(activity.path, f"{name}_create", create, methods=["POST"])
    bp.add_url_rule(f"{activity.path}/<raw_id>", f"{name}_get", get_one, methods=["GET"])
    bp.add_url_rule(
        f"{activity.path}/<raw_id>/participate",
        f"{name}_participate",
        participate,
        methods=["POST"],
    )


def create_api_blueprint(session_factory: Callable[[], Any], key: Optional[str] = None) -> Blueprint:
    """Build the ``/api`` blueprint; writes require a bearer token signed with ``key``."""
    bp = Blueprint("api", __name__, url_prefix="/api")

    def public(view):
        @wraps(view)
        def wrapper(**kwargs):
            with session_factory() as session:
                return view(session, **kwargs)

        return wrapper

    def protected(view):
        @wraps(view)
        def wrapper(**kwargs):
            with session_factory() as session:
                try:
                    teacher = authenticate(session, request.headers.get("Authorization"), key)
                except AuthError as exc:
                    return _error(str(exc), exc.status)
                return view(session, teacher.id, **kwargs)

        return wrapper

    for activity in _ACTIVITIES:
        _register(bp, activity, public, protected)

    @public
    def categories(session):
        try:
            found = services.get_all_categories(session)
        except SQLAlchemyError:
            return _error("Kategoriler getirilemedi", 500)
        return jsonify([category.to_dict() for category in found])

    bp.add_url_rule("/categories", "categories", categories, methods=["GET"])

    @bp.get("/ping")
    def ping():
        return jsonify({"message": "pong"})

    return bp