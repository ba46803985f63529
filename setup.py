"""Setup configuration for reminderbot"""

from setuptools import setup, find_packages

setup(
    name="pr-reminder-bot",
    version="0.1.0",
    description=(
        "CLI tool and GitHub Action that reminds stale pull-request reviewers "
        "and authors of merged PRs whose branch still exists."
    ),
    author="PR Reminder Bot Contributors",
    author_email="",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "requests>=2.28.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=22.0",
            "flake8>=4.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "pr-reminder-bot=reminderbot.main:main",
        ],
    },
)
