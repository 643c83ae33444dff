"""ephemeris - import Day One journals into an Org mode datetree."""

__version__ = "0.3.0"
