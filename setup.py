import os

from setuptools import setup, find_packages

here = os.path.abspath(os.path.dirname(__file__))
README = open(os.path.join(here, 'README.txt')).read()
CHANGES = open(os.path.join(here, 'CHANGES.txt')).read()

requires = [
    'pyramid',
    'plaster_pastedeploy',
    'waitress',
    'WebOb',
    'zope.interface',
    'requests',
    ]

tests_require = [
    'mock',
    ]

setup(name='push-subscriber',
      version='0.1',
      description='push-subscriber',
      long_description=README + '\n\n' +  CHANGES,
      classifiers=[
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Framework :: Pyramid",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
        ],
      author='Six Feet Up',
      author_email='info@sixfeetup.com',
      url='http://www.sixfeetup.com',
      keywords='web pyramid pubsubhubbub websub',
      packages=find_packages(),
      include_package_data=True,
      zip_safe=False,
      install_requires = requires,
      tests_require= requires + tests_require,
      extras_require={'test': tests_require},
      test_suite="pushsub",
      entry_points = """\
      [paste.app_factory]
      main = pushsub:main
      [console_scripts]
      pushsub_subscribe = pushsub.scripts:subscribe_topic
      pushsub_unsubscribe = pushsub.scripts:unsubscribe_topic
      """,
      )
