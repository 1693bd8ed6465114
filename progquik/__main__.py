from progquik.cli import main

main()
