"""Motif and background models for tfscan."""

from .base import BaseMotif
from .background import Background
from .pwm import PWM
