"""BBCode to HTML rendering engine

Parses BBCode (http://en.wikipedia.org/wiki/BBCode) in to a tree of nodes and
renders it as HTML. Repairs badly nested BBCode, detects links, email
addresses and emoticons, and highlights code with Pygments.
"""

VERSION = "1.0.0"

classifiers = """\
Development Status :: 5 - Production/Stable
Intended Audience :: Developers
Programming Language :: Python
Programming Language :: Python :: 3
License :: OSI Approved :: GNU Lesser General Public License v3 or later (LGPLv3+)
Operating System :: OS Independent
Topic :: Text Processing :: Markup
"""

from setuptools import setup

doclines = __doc__.split("\n")

setup( install_requires=['setuptools', 'Pygments'],
       extras_require={'test': ['pytest']},
       name='sbbcode',
       version = VERSION,
       license = "LGPL-3.0-or-later",
       platforms = ['any'],
       description = doclines[0],
       long_description = '\n'.join(doclines[2:]),
       packages = ["sbbcode", "sbbcode.tests"],
       python_requires = '>=3.8',
       classifiers = classifiers.splitlines(),
       )
