import os
from setuptools import find_packages, setup

with open("README.md") as readme_file:
    readme = readme_file.read()

this = os.path.dirname(os.path.realpath(__file__))


def read(name):
    with open(os.path.join(this, name)) as f:
        return f.read()

VERSION = "3.2"


setup(
    name="tpacpi-bat",
    version=VERSION,
    description="ThinkPad battery charge control through ACPI calls",
    long_description=readme,
    long_description_content_type="text/markdown",
    url="https://github.com/teleshoes/tpacpi-bat",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=read("requirements.txt").splitlines(),
    extras_require={"test": ["pytest"]},
    python_requires=">=3.10",
    include_package_data=True,
    zip_safe=True,
    license="GPLv3",
    keywords="linux thinkpad battery charge threshold acpi acpi_call tlp",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: System Administrators",
        "Operating System :: POSIX :: Linux",
        "Environment :: Console",
        "Natural Language :: English",
    ],
    entry_points={"console_scripts": ["tpacpi-bat = tpacpi_bat.bin.tpacpi_bat:main"]},
)
