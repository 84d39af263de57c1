from flowerstall._cli import main

main()
