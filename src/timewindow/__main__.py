from timewindow.cli import main

main()
