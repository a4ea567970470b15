from setuptools import setup, find_packages

setup(
    name="lrc-lyrics",
    version="0.1.0",
    description="Data model, parser and formatter for LRC synchronized lyrics files",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"lrc_lyrics": ["py.typed"]},
    install_requires=[
        "typer",
    ],
    extras_require={
        "dev": [
            "pytest",
            "black",
            "ruff",
            "mypy",
        ]
    },
    entry_points={
        "console_scripts": [
            "lrc-lyrics=lrc_lyrics.cli:main",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Text Processing",
    ],
    keywords="lyrics lrc synchronized parser",
)
