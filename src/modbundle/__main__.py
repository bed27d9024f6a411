from modbundle.cli.main_cli import main

main()
