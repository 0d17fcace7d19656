# setup.py
from setuptools import setup, find_packages

setup(
    name="ctkbiru",
    version="0.1.0",
    description="Keep directory blueprints and generate directory trees from them",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={
        "ctkbiru": ["interface/locales/*.json"],
    },
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'ctkbiru=ctkbiru.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
