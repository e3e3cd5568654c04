"""Registration of the bundled site plugins with the plugin factory."""

from __future__ import annotations

from moviescrape.plugin_api import (
    SS_18AV,
    SS_AIRAV,
    SS_AVSOX,
    SS_CARIBPR,
    SS_COSPURI,
    SS_FREEJAVBT,
    SS_JAV321,
    SS_JAVBUS,
    SS_JAVHOO,
    SS_JAVLIBRARY,
    SS_JVRPORN,
    SS_MADOUQU,
    SS_MISSAV,
    SS_TKTUBE,
)
from moviescrape.plugin_factory import plugin_to_creator, register
from moviescrape.plugins.airav import AiravPlugin
from moviescrape.plugins.av18 import Av18Plugin
from moviescrape.plugins.avsox import AvsoxPlugin
from moviescrape.plugins.caribpr import CaribprPlugin
from moviescrape.plugins.cospuri import CospuriPlugin
from moviescrape.plugins.freejavbt import FreeJavBtPlugin
from moviescrape.plugins.jav321 import Jav321Plugin
from moviescrape.plugins.javbus import JavbusPlugin
from moviescrape.plugins.javhoo import JavhooPlugin
from moviescrape.plugins.javlibrary import JavLibraryPlugin
from moviescrape.plugins.jvrporn import JvrpornPlugin
from moviescrape.plugins.madouqu import MadouquPlugin
from moviescrape.plugins.missav import MissavPlugin
from moviescrape.plugins.tktube import TkTubePlugin

_BUILTIN = (
    (SS_JAVBUS, JavbusPlugin),
    (SS_JAV321, Jav321Plugin),
    (SS_CARIBPR, CaribprPlugin),
    (SS_JAVHOO, JavhooPlugin),
    (SS_AVSOX, AvsoxPlugin),
    (SS_AIRAV, AiravPlugin),
    (SS_FREEJAVBT, FreeJavBtPlugin),
    (SS_18AV, Av18Plugin),
    (SS_TKTUBE, TkTubePlugin),
    (SS_MISSAV, MissavPlugin),
    (SS_JVRPORN, JvrpornPlugin),
    (SS_JAVLIBRARY, JavLibraryPlugin),
    (SS_COSPURI, CospuriPlugin),
    (SS_MADOUQU, MadouquPlugin),
)


def register_builtin_plugins() -> None:
    """Register every bundled plugin under its site name."""
    for name, plugin_cls in _BUILTIN:
        register(name, plugin_to_creator(plugin_cls()))