[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minikin"
version = "0.1.0"
description = "Text layout helpers: font model, word breaking, caret measurement and paragraph line breaking"
requires-python = ">=3.10"
dependencies = []
keywords = ["text", "layout", "line breaking", "word breaking", "hyphenation", "unicode"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: General",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["minikin"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
