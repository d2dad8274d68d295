"""
MR_Libs - Minecraft Render Library Modules

This package contains the core functionality for turning a Minecraft skin
into fighting-game render textures, organized into specialized sub-packages:

- ImageEditingLib: Image models, tone correction and pixel operations
- LayoutLib: Layout tables, the layout remapper and layout persistence
- PipelineLib: Skin loading, canvas writing and the render pipeline
"""

__version__ = "0.1.0"
