"""
Sample Markdown Documents
=========================

Collection of sample documents for testing the rendering pipeline,
from single features to a document using all of them.
"""

# Single feature documents
HEADINGS_DOCUMENT = """# Getting Started

## Install

## Install

### Hi 😄
"""

EMOJI_DOCUMENT = """Ship it :rocket: and :+1:

Feeling 😄 today, but :not_an_emoji: stays.
"""

CHECKLIST_DOCUMENT = """- [ ] write docs
- [x] ship release
- [X] tag version
- plain item
"""

FENCED_CODE_DOCUMENT = """```python
print("hello")
```

```
no language
```

```notalanguage
x < y
```
"""

INDENTED_CODE_DOCUMENT = """Paragraph.

    indented = True
"""

HTML_BLOCK_DOCUMENT = """<div class="note">raw <b>html</b></div>

Text after.
"""

# Front matter documents
YAML_FRONT_MATTER_DOCUMENT = """---
title: Hello
draft: false
tags:
  - a
  - b
---
# Body
"""

TOML_FRONT_MATTER_DOCUMENT = """+++
title = "Hello"
count = 3
+++
Body text
"""

JSON_FRONT_MATTER_DOCUMENT = """{
"title": "Hello",
"nested": {"x": 1}
}
Body text
"""

INVALID_YAML_FRONT_MATTER_DOCUMENT = """---
title: [unclosed
---
Body text
"""

EMPTY_FRONT_MATTER_DOCUMENT = """---
---
Body text
"""

UNCLOSED_FRONT_MATTER_DOCUMENT = """---
title: Hello

Body text
"""

NOT_AT_START_FRONT_MATTER_DOCUMENT = """Intro

---
title: Hello
---
"""

# Complete documents
FULL_DOCUMENT = """---
title: Readme
version: 1.2
---
# Project :tada:

Some *text* with https://example.com and a ![logo](img/logo.png).

- [x] done
- [ ] todo

```python
def main():
    return 1
```

| a | b |
|---|---|
| 1 | 2 |
"""

HTML_DOCUMENT = """<!DOCTYPE html>
<html><body><h1>Plain HTML</h1><p># not markdown</p></body></html>
"""
