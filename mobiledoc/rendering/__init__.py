"""Rendering support for Mobiledoc documents.

Contains:
- nodes: framework-agnostic output nodes (Element, Fragment)
- renderer_iface: atom/card handler contracts and their env values
- renderer: the render walk with plugin dispatch and error policy
- exporter: tinyhtml materialization, page wrapper and file output
"""
