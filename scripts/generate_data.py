"""
Worksite Client Data Generator

Generates a realistic client CSV in the uploaded-spreadsheet layout
(name, address, ..., travel time, ..., date requested, job length).

Run: python scripts/generate_data.py [--clients 20] [--output data/clients.csv]
"""

import argparse
import csv
import os
import random
from typing import List

# Configuration
NUM_CLIENTS = 20
NUM_COLUMNS = 12

COMPANIES = [
    "Acme Builders", "Riverside Clinic", "Northgate School", "Harbor Logistics",
    "Summit Dental", "Oakwood Library", "Pioneer Foods", "Lakeside Hotel",
    "Cedar Medical", "Bluebird Cafe", "Granite Works", "Meadow Farms",
    "Union Station Offices", "Elm Street Garage", "Westfield Mall", "Sunrise Care Home"
]
STREETS = ["Main St", "High St", "Park Ave", "Mill Rd", "Church Ln", "Station Rd"]

PREFERRED_DAYS = [
    "", "", "Any", "any day",
    "Monday", "monday morning", "Monday afternoon", "Mon PM",
    "Tuesday", "tuesday am", "Tues afternoon", "tue",
    "Wednesday", "wed morning", "Wednesday PM",
    "mornings", "afternoon only", "ASAP",
]
JOB_LENGTHS = [
    "", "Half day", "Full day", "Half day 2 teams", "Full day 2 teams",
    "Full day 3 teams", "Half 4 teams", "1 session",
]

HEADER = [
    "Client Name", "Address", "Contact", "Phone", "Travel Time", "Notes",
    "Email", "Site Type", "Parking", "Access", "Date Requested", "Job Length"
]


def generate_client_row(index: int) -> List[str]:
    """One CSV row; priority clients are starred the way the office marks them"""
    row = [""] * NUM_COLUMNS
    name = f"{random.choice(COMPANIES)} #{index + 1}"
    if random.random() < 0.15:
        name = f"*{name}"
    row[0] = name
    row[1] = f"{random.randint(1, 250)} {random.choice(STREETS)}"
    row[4] = f"{random.choice([10, 15, 20, 30, 45, 60])} min"
    row[10] = random.choice(PREFERRED_DAYS)
    row[11] = random.choice(JOB_LENGTHS)
    return row


def write_clients_csv(path: str, num_clients: int = NUM_CLIENTS, seed: int = None):
    """Write a header plus num_clients rows to path"""
    if seed is not None:
        random.seed(seed)

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(HEADER)
        for i in range(num_clients):
            writer.writerow(generate_client_row(i))


def main():
    parser = argparse.ArgumentParser(description="Generate sample worksite client data")
    parser.add_argument("--clients", type=int, default=NUM_CLIENTS, help="Number of clients")
    parser.add_argument("--output", type=str, default="data/clients.csv", help="Output CSV path")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args()

    write_clients_csv(args.output, args.clients, args.seed)
    print(f"✓ Generated {args.clients} clients -> {args.output}")


if __name__ == "__main__":
    main()
