from setuptools import setup, find_packages

setup(
    name="blindproto",
    version="0.1.0",
    description="Decode protobuf wire data without a schema",
    long_description=open("README.md", "r", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    license="MIT",
    entry_points={"console_scripts": ["blindproto=blindproto.cli:main"]},
    packages=find_packages(exclude=["tests", "*.tests", "*.tests.*"]),
    package_data={"blindproto": ["py.typed"]},
    python_requires=">=3.8",
    install_requires=[
        "rich",
        "stringcase",
        "typer",
        "typing_extensions>=4.1",
    ],
    extras_require={"test": ["pytest", "protobuf"]},
    zip_safe=False,
)
