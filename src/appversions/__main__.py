from appversions.cli.cli import main

main()
