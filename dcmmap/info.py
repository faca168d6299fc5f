
_version_major = 0
_version_minor = 1
_version_micro = 0
_version_extra = 'dev'
__version__ = "%s.%s.%s%s" % (_version_major,
                              _version_minor,
                              _version_micro,
                              _version_extra)

CLASSIFIERS = ["Development Status :: 3 - Alpha",
               "Environment :: Console",
               "Intended Audience :: Science/Research",
               "License :: OSI Approved :: MIT License",
               "Operating System :: OS Independent",
               "Programming Language :: Python",
               "Topic :: Scientific/Engineering :: Medical Science Apps."]

description = 'Typed hierarchical DICOM meta data maps and query templates'

# Dependencies
install_requires = ['pydicom >= 2.0',
                    'click',
                    'toml',
                    'tree-format',
                    'cattrs',
                    'typing_extensions',
                    'rich',
                    ]
tests_require = ['pytest']

extras_requires = {'tests': tests_require}


NAME                = 'dcmmap'
AUTHOR              = "Brendan Moloney"
AUTHOR_EMAIL        = "moloney@ohsu.edu"
MAINTAINER          = "Brendan Moloney"
MAINTAINER_EMAIL    = "moloney@ohsu.edu"
DESCRIPTION         = description
LICENSE             = "MIT license"
CLASSIFIERS         = CLASSIFIERS
PLATFORMS           = "OS Independent"
ISRELEASE           = _version_extra == ''
VERSION             = __version__
INSTALL_REQUIRES    = install_requires
TESTS_REQUIRE       = tests_require
EXTRAS_REQUIRES     = extras_requires
PROVIDES            = ["dcmmap"]
