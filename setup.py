#!/usr/bin/env python3

from setuptools import setup, find_packages
import os

# Read version from __init__.py
def get_version():
    version_file = os.path.join(os.path.dirname(__file__), 'dnsmasq_manager', '__init__.py')
    with open(version_file) as f:
        for line in f:
            if line.startswith('__version__'):
                return line.split('=')[1].strip().strip('"\'')
    return '0.1.0'

setup(
    name="dnsmasq-manager",
    version=get_version(),
    description="dnsmasq static DHCP host reservation manager",
    long_description="HTTP API and CLI for the dhcp-host= reservations of a dnsmasq server",
    author="dnsmasq-manager Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "flask>=2.0.0",
        "requests>=2.25.0",
        "pyyaml>=5.4.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "dnsmasq-manager=dnsmasq_manager.cli.main:main",
            "dnsmasq-manager-server=dnsmasq_manager.services.api_server:main",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: System :: Systems Administration",
        "Topic :: System :: Networking",
    ],
)
