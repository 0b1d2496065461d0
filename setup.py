"""Setup the library."""
from __future__ import annotations

from setuptools import setup

setup(
    name="asgi-url",
    version="1.0.0",
    description="URL value object for ASGI applications: parse, modify and build URLs",
    license="MIT",
    packages=["asgi_url"],
    python_requires=">=3.9",
    install_requires=[
        "multidict >= 4.6.0",
        "yarl >= 1.9.0",
    ],
    extras_require={
        "tests": [
            "pytest",
            "pytest-aio >= 1.1.0",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Internet :: WWW/HTTP",
        "Framework :: AsyncIO",
    ],
)
