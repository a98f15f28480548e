from floodpaint.cli import main

main()
