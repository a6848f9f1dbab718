[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "actorbox"
version = "0.1.0"
description = "An asyncio actor framework with bounded mailboxes, request/notify addressing, device contexts and LoRa/network interface types."
requires-python = ">=3.10"
dependencies = []
keywords = ["actor", "asyncio", "message-passing", "mailbox", "lora", "framework"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Framework :: AsyncIO",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
actorbox-hello = "actorbox.hello:main"

[tool.hatch.build.targets.wheel]
packages = ["actorbox"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
