# Body of a single placeholder, i.e. the text strictly between the delimiters:
#   "name"            -> NAME
#   "name, format"    -> NAME SEPARATOR FORMAT
#   "name,"           -> NAME SEPARATOR          (blank format, rejected later)
# Only the first separator counts; the format may itself contain commas.
BODY_GRAMMAR = r"""
start: NAME? (SEPARATOR FORMAT?)?

NAME: /[^,]+/
SEPARATOR: ","
FORMAT: /.+/s
"""
