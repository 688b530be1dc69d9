from bundlediag.cli import cli

cli()
