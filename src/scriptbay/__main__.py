from scriptbay.cli.cli import main

main()
