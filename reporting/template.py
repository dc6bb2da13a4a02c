# =============================================================================
# reporting/template.py - Self-contained HTML report template
# =============================================================================

REPORT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>LAPS Status Report - {{ domain }}</title>
<style>
  body { font-family: "Segoe UI", Tahoma, Arial, sans-serif; margin: 0; background: #f3f5f8; color: #1f2933; }
  header { background: #0b3d91; color: #fff; padding: 1.25rem 2rem; }
  header h1 { margin: 0; font-size: 1.5rem; }
  header p { margin: 0.25rem 0 0; opacity: 0.85; }
  main { padding: 1.5rem 2rem; }
  .cards { display: grid; grid-template-columns: repeat(auto-fill, minmax(170px, 1fr)); gap: 1rem; margin-bottom: 1.5rem; }
  .card { background: #fff; border-radius: 6px; padding: 1rem; box-shadow: 0 1px 3px rgba(0,0,0,0.12); border-top: 4px solid #0b3d91; }
  .card h3 { margin: 0 0 0.5rem; font-size: 0.8rem; text-transform: uppercase; letter-spacing: 0.04em; color: #52606d; }
  .card .value { font-size: 1.8rem; font-weight: 600; }
  .card .detail { font-size: 0.85rem; color: #52606d; margin-top: 0.25rem; }
  .card.enabled { border-top-color: #2f9e44; }
  .card.not-enabled { border-top-color: #c92a2a; }
  .card.legacy { border-top-color: #e67700; }
  .card.modern { border-top-color: #1971c2; }
  .filters { display: flex; flex-wrap: wrap; gap: 1rem; align-items: flex-end; background: #fff; padding: 1rem; border-radius: 6px; box-shadow: 0 1px 3px rgba(0,0,0,0.12); margin-bottom: 1rem; }
  .filters label { display: flex; flex-direction: column; font-size: 0.8rem; color: #52606d; gap: 0.25rem; }
  .filters select, .filters input { padding: 0.35rem 0.5rem; border: 1px solid #cbd2d9; border-radius: 4px; font-size: 0.9rem; }
  .filters .count { margin-left: auto; font-size: 0.85rem; color: #52606d; }
  table { width: 100%; border-collapse: collapse; background: #fff; box-shadow: 0 1px 3px rgba(0,0,0,0.12); }
  th, td { padding: 0.5rem 0.75rem; text-align: left; border-bottom: 1px solid #e4e7eb; font-size: 0.9rem; }
  th { background: #e4e7eb; cursor: pointer; user-select: none; white-space: nowrap; }
  th:hover { background: #cbd2d9; }
  th.asc::after { content: " \\25B2"; }
  th.desc::after { content: " \\25BC"; }
  tr:hover td { background: #f5f7fa; }
  .badge { display: inline-block; padding: 0.1rem 0.5rem; border-radius: 10px; font-size: 0.75rem; font-weight: 600; color: #fff; }
  .badge-enabled { background: #2f9e44; }
  .badge-not-enabled { background: #c92a2a; }
  .badge-legacy { background: #e67700; }
  .badge-modern { background: #1971c2; }
  .badge-none { background: #868e96; }
  .ou { font-family: Consolas, monospace; font-size: 0.8rem; color: #52606d; }
  footer { padding: 1rem 2rem 2rem; font-size: 0.8rem; color: #7b8794; }
</style>
</head>
<body>
<header>
  <h1>LAPS Deployment Status</h1>
  <p>{{ domain }}</p>
</header>
<main>
  <section class="cards">
    <div class="card">
      <h3>Total Computers</h3>
      <div class="value">{{ summary.total_computers }}</div>
    </div>
    <div class="card enabled">
      <h3>LAPS Enabled</h3>
      <div class="value">{{ summary.enabled_count }}</div>
      <div class="detail">{{ "%.2f"|format(summary.enabled_percentage) }}% of all computers</div>
    </div>
    <div class="card not-enabled">
      <h3>LAPS Not Enabled</h3>
      <div class="value">{{ summary.not_enabled_count }}</div>
      <div class="detail">{{ "%.2f"|format(summary.not_enabled_percentage) }}% of all computers</div>
    </div>
    <div class="card legacy">
      <h3>Legacy LAPS</h3>
      <div class="value">{{ summary.legacy_count }}</div>
    </div>
    <div class="card modern">
      <h3>Windows LAPS</h3>
      <div class="value">{{ summary.modern_count }}</div>
    </div>
    <div class="card">
      <h3>Servers</h3>
      <div class="value">{{ summary.server_count }}</div>
      <div class="detail">{{ summary.server_enabled_count }} enabled ({{ "%.2f"|format(summary.server_percentage) }}%)</div>
    </div>
    <div class="card">
      <h3>Clients</h3>
      <div class="value">{{ summary.client_count }}</div>
      <div class="detail">{{ summary.client_enabled_count }} enabled ({{ "%.2f"|format(summary.client_percentage) }}%)</div>
    </div>
  </section>

  <section class="filters">
    <label>OS Role
      <select id="filter-role" data-attr="role">
        <option value="">All</option>
        {% for role in os_roles %}
        <option value="{{ role }}">{{ role }}</option>
        {% endfor %}
      </select>
    </label>
    <label>LAPS Status
      <select id="filter-state" data-attr="state">
        <option value="">All</option>
        {% for state in rotation_states %}
        <option value="{{ state }}">{{ state }}</option>
        {% endfor %}
      </select>
    </label>
    <label>LAPS Type
      <select id="filter-type" data-attr="type">
        <option value="">All</option>
        {% for rotation_type in rotation_types %}
        <option value="{{ rotation_type }}">{{ rotation_type }}</option>
        {% endfor %}
      </select>
    </label>
    <label>Account Enabled
      <select id="filter-account" data-attr="account">
        <option value="">All</option>
        <option value="Yes">Yes</option>
        <option value="No">No</option>
      </select>
    </label>
    <label>Computer Name
      <input type="search" id="filter-name" placeholder="Search...">
    </label>
    <span class="count"><span id="visible-count">{{ rows|length }}</span> of {{ rows|length }} computers shown</span>
  </section>

  <table id="computers">
    <thead>
      <tr>
        <th>Computer Name</th>
        <th>OS Role</th>
        <th>Operating System</th>
        <th>LAPS Status</th>
        <th>LAPS Type</th>
        <th>Account Enabled</th>
        <th>Last Logon</th>
        <th>Organizational Unit</th>
      </tr>
    </thead>
    <tbody>
      {% for row in rows %}
      <tr data-role="{{ row.os_role.value }}" data-state="{{ row.rotation_state.value }}" data-type="{{ row.rotation_type.value }}" data-account="{{ 'Yes' if row.account_enabled else 'No' }}" data-name="{{ row.computer_name|lower }}">
        <td>{{ row.computer_name }}</td>
        <td>{{ row.os_role.value }}</td>
        <td>{{ row.operating_system }}</td>
        <td><span class="badge {{ state_badges[row.rotation_state] }}">{{ row.rotation_state.value }}</span></td>
        <td><span class="badge {{ type_badges[row.rotation_type] }}">{{ row.rotation_type.value }}</span></td>
        <td>{{ 'Yes' if row.account_enabled else 'No' }}</td>
        <td>{{ row.last_logon }}</td>
        <td class="ou">{{ row.organizational_unit }}</td>
      </tr>
      {% endfor %}
    </tbody>
  </table>
</main>
<footer>
  Generated {{ generated_at }} for domain {{ domain }}
</footer>
<script>
(function () {
  var table = document.getElementById('computers');
  var tbody = table.tBodies[0];
  var selects = document.querySelectorAll('.filters select');
  var search = document.getElementById('filter-name');
  var counter = document.getElementById('visible-count');

  function applyFilters() {
    var needle = search.value.trim().toLowerCase();
    var visible = 0;
    Array.prototype.forEach.call(tbody.rows, function (row) {
      var show = true;
      Array.prototype.forEach.call(selects, function (select) {
        if (select.value && row.getAttribute('data-' + select.getAttribute('data-attr')) !== select.value) {
          show = false;
        }
      });
      if (needle && row.getAttribute('data-name').indexOf(needle) === -1) {
        show = false;
      }
      row.style.display = show ? '' : 'none';
      if (show) { visible++; }
    });
    counter.textContent = visible;
  }

  Array.prototype.forEach.call(selects, function (select) {
    select.addEventListener('change', applyFilters);
  });
  search.addEventListener('input', applyFilters);

  var headers = table.tHead.rows[0].cells;
  Array.prototype.forEach.call(headers, function (header, index) {
    header.addEventListener('click', function () {
      var ascending = !header.classList.contains('asc');
      Array.prototype.forEach.call(headers, function (h) { h.classList.remove('asc', 'desc'); });
      header.classList.add(ascending ? 'asc' : 'desc');

      var rows = Array.prototype.slice.call(tbody.rows);
      rows.sort(function (a, b) {
        var x = a.cells[index].textContent.trim().toLowerCase();
        var y = b.cells[index].textContent.trim().toLowerCase();
        if (x === y) { return 0; }
        return (x < y ? -1 : 1) * (ascending ? 1 : -1);
      });
      rows.forEach(function (row) { tbody.appendChild(row); });
    });
  });
})();
</script>
</body>
</html>
"""
