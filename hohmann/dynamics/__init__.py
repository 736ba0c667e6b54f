"""Dynamics module for two-body motion and Hohmann transfers."""

from .two_body import *
from .transfer import *
from .orbital_elements import *
