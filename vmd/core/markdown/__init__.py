"""
Markdown Processing Module
==========================

Markdown parsing and syntax tree transformation into HTML.

Components:
- renderer: Rendering pipeline composing the transformers below
- emoji: Unicode emoji and :shortcode: substitution with images
- checklists: Task list item styling
- code_blocks: Code block classes and Pygments highlighting
- slugs: GitHub style heading ids
- frontmatter: YAML, TOML and JSON front matter extraction and rendering
"""
