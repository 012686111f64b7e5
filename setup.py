import jsonguess
from setuptools import setup

setup(
    name='jsonguess',
    description='Guess type definitions from JSON samples.',
    version=jsonguess.__version__,
    url='N/A',
    author='ycyuxin',
    author_email='ycyuxin(at)qq.com',
    packages=['jsonguess'],
    entry_points={
        'console_scripts':
            [
                'jsonguess = jsonguess.typegen:run',
            ]
    },
    install_requires=[
        'click',
        'jsonschema',
        'PyYAML',
        'pyaml',
    ],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=False
)
