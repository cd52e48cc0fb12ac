from baseline_pages.cli import main

main()
