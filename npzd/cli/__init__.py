#!/usr/bin/env python

try:
    import click

    have_click = True
except ImportError:
    have_click = False

if not have_click:
    raise ImportError("The npzd command line tools require click (e.g. through `pip install click`)")

del click
del have_click
