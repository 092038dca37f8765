"""
Controller layer for the calendar app.

Controllers sit between the PyQt views under ``ui/`` and the plain models
under ``models/``. ``SelectionController`` owns the range selection and
applies the tap/drag rules; ``AppController`` wires it to the main window
and the persisted settings in ``services.config``.
"""
