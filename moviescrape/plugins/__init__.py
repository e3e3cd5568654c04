"""Bundled site plugins; the registry module adds them to the plugin factory."""