from setuptools import setup, find_packages
from codecs import open
from os import path

here = path.abspath(path.dirname(__file__))
with open(path.join(here, 'spinlab', 'VERSION')) as f:
    VERSION = f.read().strip('\n')  # editors love to add newline

with open(path.join(here, 'README.rst'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='spinlab',
    version=VERSION,
    description='Reproducible sleep spindle detection on full-night EEG',
    long_description=long_description,
    license='GPLv3',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Healthcare Industry',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering :: Bio-Informatics',
        'Topic :: Scientific/Engineering :: Medical Science Apps.',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Programming Language :: Python :: 3 :: Only',
    ],
    keywords='neuroscience analysis sleep EEG spindles',
    packages=find_packages(exclude=('tests', )),
    install_requires=[
        'numpy',
        'scipy',
        'PyWavelets',
        ],
    extras_require={
        'test': [  # to run tests
            'pytest',
            'pytest-cov',
            ],
    },
    package_data={
        'spinlab': [
            'VERSION',
            ],
    },
)
