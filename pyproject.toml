[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "moviescrape"
version = "0.1.0"
description = "Movie metadata lookup through pluggable site searchers, XPath decoding of HTML pages and a caching key/value store"
requires-python = ">=3.10"
keywords = ["metadata", "scraper", "movies", "xpath", "cache", "sqlite"]
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
    "Topic :: Multimedia :: Video",
    "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
]
dependencies = [
    "httpx",
    "lxml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["moviescrape"]

[tool.pytest.ini_options]
addopts = "-ra"
