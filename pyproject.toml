[build-system]
requires = ["setuptools>=68", "wheel"]
build-backend = "setuptools.build_meta"

[project]
name = "atolyehub"
version = "0.1.0"
description = "JSON HTTP API for teachers' projects, workshops and competitions, with JWT-protected participation"
requires-python = ">=3.10"
keywords = ["flask", "rest", "api", "jwt", "sqlalchemy", "education", "workshops"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Education",
]
dependencies = [
    "flask>=2.3",
    "sqlalchemy>=2.0",
    "pyjwt>=2.8",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
]

[project.scripts]
atolyehub = "atolyehub.app:main"

[tool.setuptools]
packages = ["atolyehub"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
