"""swagts -- Generate TypeScript request functions and models from Swagger 2.0 specs.

This package translates a Swagger 2.0 API description into a language-agnostic
intermediate representation (IR) of types and operations, then renders that IR
into TypeScript source files with Jinja2 templates.

Typical workflow::

    swagts generate petstore.yaml --dist ./src/api --naming camel

The generated tree contains one model file per definition, one request file per
operation, and a shared ``APIRequest.ts`` interface.

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic IR models shared across the entire package.
    config: Generate-option resolution (flags, env, project config).
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
