[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "adhnoise"
version = "0.2.0"
description = "Colored noise generator with an equalizer window and a playback daemon"
requires-python = ">=3.10"
keywords = ["noise", "white noise", "colored noise", "equalizer", "focus", "audio"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]
dependencies = [
    "numpy",
    "scipy",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
adh-daemon = "adhnoise.daemon:main"
adh-gui = "adhnoise.gui:main"

[tool.hatch.build.targets.wheel]
packages = ["adhnoise"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]
