from setuptools import setup, find_namespace_packages

setup(
    name='spectre',
    packages=find_namespace_packages(include=["spectre*"], exclude=["spectre.tests*"]),
    url='https://github.com/ProsiaLAB/spectre',
    license='(c) authors',
    author='ProsiaLAB',
    description='Readers for the Leiden Atomic and Molecular Database and Gaussian beam arithmetic for radio astronomy',
    install_requires=[
        'numpy >= 1.18.0',
        'astropy >= 4.1.1',
    ],
    extras_require={
        'test': ['pytest'],
    },
    version='0.1.0',
    python_requires=">=3.8",
)
