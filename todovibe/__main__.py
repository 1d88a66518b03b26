from todovibe.interfaces.cli.main import main

main()
