"""
Run Monitoring for Worksite Team Assigner

Tracks timing and fulfilment metrics across assignment runs.
"""

import time
import json
import os
from typing import Dict
from datetime import datetime


class RunMonitor:
    """Monitors and logs assignment run metrics"""

    def __init__(self, log_dir: str = "logs"):
        self.log_dir = log_dir
        self.session_start = datetime.now()
        self.metrics = {
            'load_times': [],
            'assignment_times': [],
            'runs': 0,
            'clients_processed': 0,
            'assignments_made': 0,
            'session_shortfalls': 0,
            'team_shortfalls': 0,
            'last_load_spread': None
        }

    def start_timer(self) -> float:
        """Start timing an operation"""
        return time.time()

    def end_timer(self, start_time: float, operation: str) -> float:
        """End timing and record duration"""
        duration = time.time() - start_time
        if operation == 'load':
            self.metrics['load_times'].append(duration)
        elif operation == 'assignment':
            self.metrics['assignment_times'].append(duration)
        return duration

    def record_run(self, num_clients: int, result) -> None:
        """Record one assignment run (an AssignmentResult)"""
        self.metrics['runs'] += 1
        self.metrics['clients_processed'] += num_clients
        self.metrics['assignments_made'] += len(result.assignments)

        for shortfall in result.shortfalls:
            if shortfall.kind == 'session':
                self.metrics['session_shortfalls'] += 1
            else:
                self.metrics['team_shortfalls'] += 1

        loads = list(result.team_loads().values())
        self.metrics['last_load_spread'] = (max(loads) - min(loads)) if loads else 0

    def get_summary(self) -> Dict:
        """Get run summary"""
        now = datetime.now()
        session_duration = (now - self.session_start).total_seconds()

        avg_assignment_time = (
            sum(self.metrics['assignment_times']) / len(self.metrics['assignment_times'])
            if self.metrics['assignment_times'] else 0
        )

        avg_load_time = (
            sum(self.metrics['load_times']) / len(self.metrics['load_times'])
            if self.metrics['load_times'] else 0
        )

        return {
            'session_duration_seconds': round(session_duration, 2),
            'runs': self.metrics['runs'],
            'clients_processed': self.metrics['clients_processed'],
            'assignments_made': self.metrics['assignments_made'],
            'session_shortfalls': self.metrics['session_shortfalls'],
            'team_shortfalls': self.metrics['team_shortfalls'],
            'last_load_spread': self.metrics['last_load_spread'],
            'avg_load_time_seconds': round(avg_load_time, 4),
            'avg_assignment_time_seconds': round(avg_assignment_time, 4)
        }

    def save_session_log(self) -> str:
        """Save session metrics to file"""
        os.makedirs(self.log_dir, exist_ok=True)
        timestamp = self.session_start.strftime("%Y%m%d_%H%M%S")
        log_file = os.path.join(self.log_dir, f"runs_{timestamp}.json")

        summary = self.get_summary()
        summary['session_start'] = self.session_start.isoformat()
        summary['session_end'] = datetime.now().isoformat()

        with open(log_file, 'w') as f:
            json.dump(summary, f, indent=2)

        return log_file

    def print_realtime_status(self):
        """Print current run status"""
        summary = self.get_summary()

        print("\n" + "="*60)
        print("🔍 RUN MONITOR")
        print("="*60)
        print(f"Session Duration: {summary['session_duration_seconds']}s")
        print(f"Runs: {summary['runs']}")
        print(f"Clients Processed: {summary['clients_processed']}")
        print(f"Assignments Made: {summary['assignments_made']}")
        print(f"\n📊 SHORTFALLS:")
        print(f"  Sessions: {summary['session_shortfalls']}")
        print(f"  Teams: {summary['team_shortfalls']}")
        print(f"  Load spread (last run): {summary['last_load_spread']}")
        print(f"\n⚡ TIMING:")
        print(f"  Avg Load Time: {summary['avg_load_time_seconds']}s")
        print(f"  Avg Assignment Time: {summary['avg_assignment_time_seconds']}s")
        print("="*60)
