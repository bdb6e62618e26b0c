from setuptools import setup, find_packages
import re

# Read version from payportal/__init__.py
with open('payportal/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='payportal',
    version=version,
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'payportal': ['config/rate_schedules/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
            'hypothesis>=6.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'pay-portal=payportal.cli.__main__:main',
            'pay-portal-mcp=payportal.mcp.server:run_server',
        ],
    },
    author='Employee Portal',
    description='Statutory payroll deduction and pay-period computation engine.',
    python_requires='>=3.10',
)
