from timew_report.cli import main

main()
