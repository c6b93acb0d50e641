from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from atolyehub.models import (
    Atolye,
    AtolyeParticipant,
    Base,
    Category,
    Project,
    ProjectParticipant,
    Teacher,
    Yarisma,
    YarismaParticipant,
)


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine) as db:
        yield db
    engine.dispose()


@pytest.fixture
def teacher(session):
    password = "password"
    row = Teacher(email="teacher@example.com", name="Ada", surname="Lovelace", password=password)
    session.add(row)
    session.commit()
    return row


@pytest.fixture
def category(session):
    row = Category(name="Bilim")
    session.add(row)
    session.commit()
    return row


def test_table_names():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    names = set(inspect(engine).get_table_names())
    engine.dispose()
    assert {
        "teacher",
        "project",
        "atolye",
        "yarisma",
        "project_participants",
        "atolye_participants",
        "yarisma_participants",
    } <= names
    assert Teacher.__tablename__ == "teacher"
    assert ProjectParticipant.__tablename__ == "project_participants"


def test_teacher_to_dict_hides_password(teacher):
    data = teacher.to_dict()
    assert "password" not in data
    assert data["email"] == "teacher@example.com"
    assert data["teacherId"] == teacher.id


def test_teacher_omits_empty_optional_fields():
    data = Teacher(email="a@example.com").to_dict()
    assert "birthDate" not in data
    assert "googleId" not in data


def test_teacher_includes_set_optional_fields():
    born = datetime(2000, 1, 2, tzinfo=timezone.utc)
    data = Teacher(google_id="gid", birth_date=born).to_dict()
    assert data["googleId"] == "gid"
    assert datetime.fromisoformat(data["birthDate"]) == born


def test_category_to_dict(category):
    assert category.to_dict() == {"id": category.id, "name": "Bilim"}


def test_category_name_unique(session, category):
    session.add(Category(name="Bilim"))
    with pytest.raises(IntegrityError):
        session.commit()


def test_project_round_trip(session, teacher, category):
    start = datetime(2024, 5, 1, 9, 30)
    project = Project(
        teacher_id=teacher.id,
        category_id=category.id,
        project_name="Robotik",
        description="desc",
        start_date=start,
    )
    session.add(project)
    session.commit()
    session.expire_all()
    loaded = session.get(Project, project.id)
    data = loaded.to_dict()
    assert data["projeAdi"] == "Robotik"
    assert data["aciklama"] == "desc"
    assert data["teacher"] == teacher.to_dict()
    assert data["category"] == category.to_dict()
    assert data["bitisTarihi"] is None
    assert datetime.fromisoformat(data["baslangicTarihi"]).replace(tzinfo=None) == start


def test_project_without_relations_has_zero_values():
    data = Project().to_dict()
    assert data["teacher"]["teacherId"] == 0
    assert data["teacher"]["email"] == ""
    assert data["category"] == {"id": 0, "name": ""}
    assert data["projectId"] == 0


def test_atolye_uses_field_name_keys(session, teacher, category):
    atolye = Atolye(teacher_id=teacher.id, category_id=category.id, workshop_name="Resim")
    session.add(atolye)
    session.commit()
    data = atolye.to_dict()
    assert data["WorkshopName"] == "Resim"
    assert data["ID"] == atolye.id
    assert data["Teacher"] == teacher.to_dict()
    assert "projeAdi" not in data


def test_yarisma_columns(session, teacher, category):
    yarisma = Yarisma(
        teacher_id=teacher.id,
        category_id=category.id,
        competition_name="Kodlama",
        text="Baslik",
        amount="100",
    )
    session.add(yarisma)
    session.commit()
    data = yarisma.to_dict()
    assert data["atolyeAdi"] == "Kodlama"
    assert data["baslik"] == "Baslik"
    assert data["tutar"] == "100"
    assert data["yarismaId"] == yarisma.id


def test_project_participant_unique(session, teacher, category):
    project = Project(teacher_id=teacher.id, category_id=category.id, project_name="P")
    session.add(project)
    session.commit()
    first = ProjectParticipant(project_id=project.id, teacher_id=teacher.id)
    session.add(first)
    session.commit()
    data = first.to_dict()
    assert data["projectId"] == project.id
    assert data["project"]["projeAdi"] == "P"
    assert data["createdAt"] is not None and "T" in data["createdAt"]
    session.add(ProjectParticipant(project_id=project.id, teacher_id=teacher.id))
    with pytest.raises(IntegrityError):
        session.commit()


def test_atolye_participant_unique(session, teacher):
    atolye = Atolye(teacher_id=teacher.id, workshop_name="W")
    session.add(atolye)
    session.commit()
    session.add(AtolyeParticipant(atolye_id=atolye.id, teacher_id=teacher.id))
    session.commit()
    session.add(AtolyeParticipant(atolye_id=atolye.id, teacher_id=teacher.id))
    with pytest.raises(IntegrityError):
        session.commit()


def test_yarisma_participant_to_dict(session, teacher):
    yarisma = Yarisma(teacher_id=teacher.id, competition_name="Y")
    session.add(yarisma)
    session.commit()
    participant = YarismaParticipant(yarisma_id=yarisma.id, teacher_id=teacher.id)
    session.add(participant)
    session.commit()
    data = participant.to_dict()
    assert data["yarisma"]["atolyeAdi"] == "Y"
    assert data["teacher"]["teacherId"] == teacher.id
    assert data["yarismaId"] == yarisma.id


def test_aware_time_keeps_offset():
    moment = datetime(2024, 5, 1, tzinfo=timezone.utc)
    data = Yarisma(end_date=moment).to_dict()
    assert data["bitisTarihi"] == "2024-05-01T00:00:00+00:00"