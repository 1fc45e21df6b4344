"""A setuptools module for sacio.
See:
https://packaging.python.org/en/latest/distributing.html
https://github.com/pypa/sampleproject
"""

# Always prefer setuptools over distutils
from setuptools import setup


setup(
    name="sacio",
    version="1.0.0",
    # metadata for upload to PyPI
    description="Read and write SAC (Seismic Analysis Code) binary files",
    license="MIT",
    keywords="sac seismic waveform binary header",
    python_requires=">=3.6",
    install_requires=[
                      'numpy',
                      'construct>=2.10'
                     ],
    extras_require={
        'test': ['testfixtures<12', 'pytest'],
    },
    classifiers=[
        # How mature is this project? Common values are
        #   3 - Alpha
        #   4 - Beta
        #   5 - Production/Stable
        "Development Status :: 4 - Beta",

        # Indicate who your project is intended for
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering :: Physics',

        # Pick your license as you wish (should match "license" above)
        'License :: OSI Approved :: MIT License',

        'Programming Language :: Python :: 3',
    ],
    packages=['sacio',
              'sacio.core',
              'sacio.core.tests'],
)
