# setup.py
from setuptools import setup, find_packages

setup(
    name="quasi",
    version="0.1.0",
    description="Quotation and quasiquotation engine: capture expressions with their scope",
    packages=find_packages(include=["quasi", "quasi.*"]),
    python_requires=">=3.10",
    install_requires=["numpy"],
    extras_require={"test": ["pytest", "hypothesis"]},
    zip_safe=False,
)
