#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Setup configuration for the campaign notification service.
"""

from setuptools import setup, find_namespace_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="campaign-notification-service",
    version="1.0.0",
    author="Crowdfunding Platform",
    description="Consumes campaign lifecycle events and emails campaign owners",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_namespace_packages(include=["core", "core.*", "microservices", "microservices.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "aio-pika>=9.0.0",
        "grpcio>=1.50.0",
        "protobuf>=4.25.0",
        "pydantic>=2.0.0",
        "httpx>=0.24.0",
        "jinja2>=3.1.0",
        "python-dotenv>=1.0.0",
        "tzdata>=2023.3",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "campaign-notifier=microservices.campaign_notification_service.main:main",
        ],
    },
    include_package_data=True,
    package_data={
        "microservices.campaign_notification_service": ["templates/*.html"],
        "microservices.campaign_notification_service.proto": ["*.proto"],
    },
)
