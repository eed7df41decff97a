"""
Resume form models.

`sections` holds the structured form data the composer turns into markdown.
`schema` holds the validation rules applied before a submission is accepted.

No disk, network, or database access is performed in this package.
"""
