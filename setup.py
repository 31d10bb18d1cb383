# Welcome to the Polyroot setup.py.
import sys

# Make sure that polyroot is running on Python 3.9.0 or later
# (builtin generics are used in annotations)

if sys.version_info < (3, 9, 0):
    raise RuntimeError("Polyroot requires Python 3.9.0 or later.")


from setuptools import find_packages, setup

setup(
    name='polyroot',
    version='0.1.0',
    description='Batched real roots of low degree polynomials in PyTorch',
    license='Apache License 2.0',
    python_requires='>=3.9',
    packages=find_packages(include=['polyroot', 'polyroot.*']),
    install_requires=['packaging', 'torch>=1.9.1', 'typing_extensions'],
    tests_require=['pytest'],
    extras_require={
        'dev': [
            'mypy[reports]',
            'numpy',
            'pytest==7.2.1',
            'pytest-cov==4.0.0',
        ],
    },
)
