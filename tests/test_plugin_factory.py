import pytest

from moviescrape.plugin_api import Plugin, PluginError
from moviescrape.plugin_factory import create_plugin, plugin_to_creator, plugins, register


def test_register_and_create():
    plugin = Plugin()
    register("test-factory-one", plugin_to_creator(plugin))
    assert create_plugin("test-factory-one") is plugin
    assert create_plugin("test-factory-one", {"any": "thing"}) is plugin


def test_unknown_plugin_raises():
    with pytest.raises(PluginError):
        create_plugin("test-factory-never-registered")


def test_creator_receives_args():
    received = []
    made = Plugin()

    def creator(args):
        received.append(args)
        return made

    register("test-factory-args", creator)
    result = create_plugin("test-factory-args", 7)
    assert result is made
    assert received == [7]


def test_plugins_lists_sorted_names():
    register("test-factory-zz", plugin_to_creator(Plugin()))
    register("test-factory-aa", plugin_to_creator(Plugin()))
    names = plugins()
    assert "test-factory-zz" in names and "test-factory-aa" in names
    assert names == sorted(names)