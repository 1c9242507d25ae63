"""
ISO/IEC/IEEE 24765 Glossary Translator Package.

This package provides a batch pipeline that translates the ISO/IEC/IEEE 24765
systems and software engineering vocabulary from English to Japanese by
driving Chrome's built-in Translator API through Selenium, together with a
validation engine that checks the resulting bilingual dataset.

Modules:
    config: Configuration settings and logging setup.
    core: Data model, dataset I/O and exception hierarchy.
    browser: Selenium WebDriver handling and the Chrome translation gateway.
    translation: Context wrapping, per-term translation, batch processing
        and resume support.
    validation: Structural, content, completeness and quality checks plus
        report rendering.
    utils: Terminal progress display.

Author: Leonardo Pacciani-Mori
License: MIT
"""

__version__ = "1.0.0"
__author__ = "Leonardo Pacciani-Mori"
