"""Print export of the markdown resume.

`renderer` turns markdown into a self-contained printable HTML page,
`surfaces` holds the presentation surfaces the page is shown on, and
`pipeline` drives load, print and close on a surface.
"""
