from setuptools import setup, find_packages

setup(
    name="skill-installer",
    version="3.0.0",
    description="Install AI coding assistant skills, agents and commands into project or user directories",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={
        "skill_installer": [
            "bundle/*/*",
            "bundle/*/*/*",
            "bundle/*/*/*/*",
        ],
    },
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "typer>=0.16.0",
        "rich>=13.7.1",
        "GitPython>=3.1.43",
        "PyYAML>=6.0.2",
        "python-dotenv>=1.0.1",
        "requests>=2.32.0",
        "urllib3>=2.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.3.2",
        ],
    },
    entry_points={
        "console_scripts": [
            "skill-installer=skill_installer.apps.cli.app:app",
        ],
    },
)
