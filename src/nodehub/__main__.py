from nodehub.apps.cli.app import app

app(prog_name="nodehub")
