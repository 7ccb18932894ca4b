"""
lintforge.preset_config - Bundled Tool Presets
==============================================

Default configuration files and dependency lists for every supported tool.
See :mod:`lintforge.presets` for the directory layout and naming rules.
"""

# Preset files are read through importlib.resources.
