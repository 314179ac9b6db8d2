"""
Kennelkit Tools - Optional utilities around kennelkit models.

Kept separate from the core library so that declaring resources does not pull
in anything needed only to capture existing ones.

Available modules:
    - importer: Capture existing monitors and dashboards as declarations

Usage:
    from kennelkit import Api
    from kennelkit_tools.importer import Importer, ImportOptions

    importer = Importer(Api.from_env())
    print(importer.import_all(ImportOptions.from_env()))
"""

__version__ = "0.1.0"
