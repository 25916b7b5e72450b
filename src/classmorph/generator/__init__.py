"""
Class generation pipeline.

Builds an ES class tree from the arguments of a factory-style class call:
namespace resolution, class shell, member classification, static and
instance member assembly. ``classmorph.generator.program`` sequences them.
"""
