from ringwar.cli.main import main

main()
