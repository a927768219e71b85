"""
Services Layer
Presentation-specific services used primarily in routes.

Services should:
- Not modify stored collections
- Read from several collections to aggregate information
- Handle presentation concerns (export formatting, filenames, MIME types)
"""
