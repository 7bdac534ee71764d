from setuptools import setup, find_packages

setup(
    name="clinicflow",
    version="0.1.0",
    description="Patient-flow simulation comparing a standard clinic with an AI-enabled clinic",
    packages=find_packages(include=["clinicflow", "clinicflow.*"]),
    install_requires=[
        "matplotlib",
        "numpy",
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
