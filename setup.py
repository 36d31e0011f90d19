from setuptools import setup, find_packages
import re

# Read version from stubcalc/__init__.py
with open('stubcalc/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='stub-calc',
    version=version,
    packages=find_packages(include=['stubcalc', 'stubcalc.*']),
    package_data={
        'stubcalc': ['tax_rules/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'stub-calc=stubcalc.cli.__main__:main',
        ],
    },
    author='Personal',
    description='Paystub calculation: gross pay, withholding, deductions and net pay for a shift.',
    python_requires='>=3.10',
)
