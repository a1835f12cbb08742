from lsdir.cli.main import lsdir_cli

if __name__ == "__main__":
    lsdir_cli()
