# atolyehub

A small JSON HTTP API, built on Flask and SQLAlchemy, where teachers publish
projects, workshops and competitions and join the ones published by others.
Reading is open to everyone; publishing and joining require a JWT bearer
token.

## Installation

```
pip install .
```

The server connects to MySQL through a `mysql+pymysql://` URL, so the
PyMySQL driver has to be installed next to the package:

```
pip install pymysql
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
atolyehub
atolyehub --host 127.0.0.1 --port 9000
```

`--host` defaults to `0.0.0.0` and `--port` to `8080`. The command first
connects to the database; when that fails it logs the error and exits with
status 1.

Settings come from the process environment, and from a `.env` file in the
working directory when one exists (variables already set in the environment
win over the file):

| Variable         | Meaning                               | Default     |
|------------------|---------------------------------------|-------------|
| `DB_USER`        | database user                         | `root`      |
| `DB_PASSWORD`    | database password                     | `password`  |
| `DB_HOST`        | database host                         | `127.0.0.1` |
| `DB_PORT`        | database port                         | `3306`      |
| `DB_NAME`        | database name                         | `piri`      |
| `JWT_SECRET_KEY` | HMAC key used to verify bearer tokens | `secret`    |

A `.env` file could look like this:

```
DB_USER=user
DB_PASSWORD=password
DB_HOST=localhost
DB_NAME=atolyehub
JWT_SECRET_KEY=secret
```

## Endpoints

All routes are under `/api`.

| Method | Path                                 | Auth | Purpose                      |
|--------|--------------------------------------|------|------------------------------|
| GET    | `/api/ping`                          | no   | health check, returns `pong` |
| GET    | `/api/categories`                    | no   | list categories              |
| GET    | `/api/projects`                      | no   | list projects                |
| GET    | `/api/projects/<id>`                 | no   | one project                  |
| POST   | `/api/projects`                      | yes  | create a project             |
| POST   | `/api/projects/<id>/participate`     | yes  | join a project               |
| GET    | `/api/workshops`                     | no   | list workshops               |
| GET    | `/api/workshops/<id>`                | no   | one workshop                 |
| POST   | `/api/workshops`                     | yes  | create a workshop            |
| POST   | `/api/workshops/<id>/participate`    | yes  | join a workshop              |
| GET    | `/api/competitions`                  | no   | list competitions            |
| GET    | `/api/competitions/<id>`             | no   | one competition              |
| POST   | `/api/competitions`                  | yes  | create a competition         |
| POST   | `/api/competitions/<id>/participate` | yes  | join a competition           |

### Authentication

Protected routes expect a header of the form

```
Authorization: Bearer token
```

where the token is a JWT signed with HS256, HS384 or HS512 and whose `sub`
claim is the e-mail address of a row in the `teacher` table, for example
`teacher@example.com`. A missing header, a header without the `Bearer `
prefix, an invalid or expired token, a token without `sub`, or an unknown
teacher all get `401` with an `error` message.

### Status codes

- `201` for a created item or a recorded participation.
- `400` for an id that is not a decimal number of at most 32 bits, for a body
  that is not a JSON object of the right types, and for joining an item that
  does not exist or that the teacher already joined.
- `404` for an item that does not exist.
- `500` when the database rejects a write or a read fails.

Errors are returned as `{"error": "..."}` with Turkish messages.

### Request bodies

Creation bodies use the database's column names as JSON keys; keys are also
matched ignoring case, unknown keys are ignored, and missing keys get empty
values. Dates are RFC 3339 timestamps and are stored as local time.

```json
{
  "categoryId": 1,
  "projeAdi": "Robotics club",
  "aciklama": "Weekly robotics sessions",
  "baslangicTarihi": "2024-09-01T09:00:00Z"
}
```

Projects and workshops accept `categoryId`, `projeAdi`, `aciklama`, `text`,
`slogan`, `konuEtiketi`, `baslangicTarihi`, `bitisTarihi`, `egitimTuru`,
`katilimciDuzeyi`, `kontenjanBilgisi`, `katilimKosulu`, `egitimUcreti`,
`iletisimOnay` and `fotoOnay`. Competitions take their name under
`atolyeAdi` and their title under `baslik`; of a competition body only
`categoryId`, `atolyeAdi`, `aciklama` and `baslik` are stored.

### Responses

Projects and competitions are returned with the same column-named keys, with
the owning `teacher` and `category` nested. Workshops are returned with
field-named keys instead (`ID`, `TeacherID`, `WorkshopName`, `Description`,
..., `Teacher`, `Category`). Teachers never include their password.
Participations carry `id`, the item id, `teacherId`, `createdAt` and the
nested item and teacher.

## Using the package in code

`atolyehub.app.create_app(session_factory, key)` builds the Flask
application around any SQLAlchemy session factory; without a factory it
calls `atolyehub.database.connect_db()`, and without a key tokens are
checked against `JWT_SECRET_KEY`. The tables are declared in
`atolyehub.models` on `Base`.

```python
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from atolyehub.app import create_app
from atolyehub.models import Base

engine = create_engine("sqlite://")
Base.metadata.create_all(engine)
app = create_app(sessionmaker(bind=engine), "secret")

with app.test_client() as client:
    print(client.get("/api/ping").get_json())  # {'message': 'pong'}
```

Other entry points:

- `atolyehub.database.database_url()` builds the MySQL URL from the `DB_*`
  variables; `connect_db(url)` opens it and returns a session factory,
  raising `ConnectionError` when the database cannot be reached.
- `atolyehub.auth.authenticate(session, authorization, key)` checks an
  `Authorization` value and returns the `Teacher`, raising `AuthError`.
- `atolyehub.services` holds the operations behind the routes
  (`create_project`, `get_all_atolyeler`, `participate_in_yarisma`,
  `get_all_categories`, ...), raising `NotFoundError` and
  `ParticipationError`.
- `atolyehub.routes.create_api_blueprint(session_factory, key)` returns the
  `/api` blueprint alone.

## What it does not do

The package does not create or migrate the MySQL schema, and it has no
routes to register teachers, log in, or issue tokens: teachers and
categories must already exist in the database, and tokens must be signed
elsewhere with the same key.